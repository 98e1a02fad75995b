"""
verbdoc package

Generate Markdown documentation (typically a README) from Jinja2 templates,
project metadata and front matter.

Key responsibilities are split across modules:
- `context.py`: merge config, metadata, data files and front matter into one context
- `template.py` / `tags.py`: synchronous Jinja2 render, then async resolution of include tags
- `postprocess.py` / `toc.py`: whitespace cleanup and table of contents insertion
- `core.py`: the public pipeline (`process`, `read`, `copy`, `expand`)
- `cli.py`: CLI entrypoint
"""

from __future__ import annotations

import logging

from verbdoc.core import ProcessResult, copy, expand, init, process, read
from verbdoc.options import Options

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["__version__", "Options", "ProcessResult", "copy", "expand", "init", "process", "read"]

__version__ = "0.1.0"
