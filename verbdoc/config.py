"""
config.py

Responsibility: Load the configuration sources that feed the template context.

- Runtime config: a user `.verbrc` file (YAML or JSON).
- Project config: package metadata from `package.json` or `pyproject.toml`,
  or an explicit mapping/path given through `Options.config`.
- Git info: remote url and branch of the local repository, when there is one.

Nothing here caches: every call reads the filesystem again.
"""

from __future__ import annotations

import json
import logging
import subprocess
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from verbdoc.filters import repo_path
from verbdoc.options import Options
from verbdoc.paths import resolve

logger = logging.getLogger(__name__)

RUNTIME_CONFIG_NAMES = (".verbrc.yml", ".verbrc.yaml", ".verbrc.json", ".verbrc")
PROJECT_CONFIG_NAMES = ("package.json", "pyproject.toml")


class ConfigError(ValueError):
    pass


def load_config_file(path: str | Path) -> dict[str, Any]:
    """
    Load a JSON, TOML or YAML file into a dict. A missing file raises FileNotFoundError.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            data = json.loads(text) if text.strip() else {}
        elif suffix == ".toml":
            data = tomllib.loads(text)
        else:
            data = yaml.safe_load(text) or {}
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Malformed config file: {path}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping at the top level: {path}")
    return data


def load_runtime_config(options: Options) -> dict[str, Any]:
    if options.verbrc:
        return load_config_file(resolve(options.base, options.verbrc))
    for name in RUNTIME_CONFIG_NAMES:
        candidate = options.base / name
        if candidate.is_file():
            logger.debug("Using runtime config %s", candidate)
            return load_config_file(candidate)
    return {}


def _from_pyproject(data: Mapping[str, Any]) -> dict[str, Any]:
    project = dict(data.get("project") or {})
    license_ = project.get("license")
    if isinstance(license_, Mapping):
        project["license"] = license_.get("text") or license_.get("file") or ""
    authors = project.get("authors") or []
    if authors and isinstance(authors[0], Mapping):
        project.setdefault("author", dict(authors[0]))
    urls = project.get("urls") or {}
    for key in ("Homepage", "homepage"):
        if key in urls:
            project.setdefault("homepage", urls[key])
    for key in ("Repository", "repository", "Source"):
        if key in urls:
            project.setdefault("repository", urls[key])
    return project


def load_project_config(options: Options) -> dict[str, Any]:
    """
    Return package metadata for the project rooted at `options.base`.

    `options.config` wins when given: a mapping is used as-is, a string/path
    is loaded as a config file. Otherwise `package.json` then `pyproject.toml`
    are tried. Git info is added under `git` unless the config already has it.
    """
    raw = options.config
    if isinstance(raw, Mapping):
        config = dict(raw)
    elif raw is not None:
        path = resolve(options.base, raw)
        config = load_config_file(path)
        if path.name == "pyproject.toml":
            config = _from_pyproject(config)
    else:
        config = {}
        for name in PROJECT_CONFIG_NAMES:
            candidate = options.base / name
            if not candidate.is_file():
                continue
            logger.debug("Using project config %s", candidate)
            config = load_config_file(candidate)
            if name == "pyproject.toml":
                config = _from_pyproject(config)
            break

    if "git" not in config:
        config["git"] = git_info(options.base)
    return config


def _git(args: list[str], cwd: Path) -> str:
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        check=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
    )
    return proc.stdout.strip()


def git_info(cwd: Path) -> dict[str, str]:
    """
    Remote url, branch and `owner/name` of the repository containing `cwd`.
    Returns {} when `cwd` is not a git checkout or git is not installed.
    """
    try:
        url = _git(["config", "--get", "remote.origin.url"], cwd)
        branch = _git(["rev-parse", "--abbrev-ref", "HEAD"], cwd)
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug("No git info for %s: %s", cwd, e)
        return {}
    info = {"url": url, "branch": branch}
    if repo_path(url):
        info["repo"] = repo_path(url)
    return info
