"""TOML config loading for bindpower.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bindpower.errors import ConfigError, TableError
from bindpower.operators import (
    Infix,
    OperatorSpec,
    OperatorTable,
    ParenLike,
    Postfix,
    Prefix,
    default_table,
    infix,
    paren_like,
    postfix,
    prefix,
)

logger = logging.getLogger(__name__)

CONFIG_NAME = "bindpower.toml"


@dataclass
class OutputConfig:
    color: bool = True
    tree: bool = False


@dataclass
class TableConfig:
    name: str = "default"


@dataclass
class BindpowerConfig:
    table: OperatorTable = field(default_factory=default_table)
    table_info: TableConfig = field(default_factory=TableConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find bindpower.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> BindpowerConfig:
    """Parse a bindpower.toml file into a BindpowerConfig."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e
    logger.debug("loaded config from %s", path)

    config = BindpowerConfig()

    if "table" in data:
        tbl = data["table"]
        name = tbl.get("name", "default") if isinstance(tbl, dict) else None
        if not isinstance(name, str):
            raise ConfigError(f"{path}: table.name must be a string, got {name!r}")
        config.table_info = TableConfig(name=name)

    if "leading" in data or "following" in data:
        config.table = table_from_data(data)

    if "output" in data:
        out = data["output"]
        config.output = OutputConfig(
            color=out.get("color", True),
            tree=out.get("tree", False),
        )

    return config


# ── Table (de)serialization ──────────────────────────────────────


def _field(entry: dict[str, Any], key: str, where: str) -> Any:
    if key not in entry:
        raise ConfigError(f"{where}: missing '{key}'")
    return entry[key]


def _bp(entry: dict[str, Any], key: str, where: str) -> int:
    value = _field(entry, key, where)
    # bool is an int subclass; reject `left_bp = true`
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigError(f"{where}: '{key}' must be an integer, got {value!r}")
    return value


def _name(entry: dict[str, Any], where: str) -> str:
    value = _field(entry, "name", where)
    if not isinstance(value, str):
        raise ConfigError(f"{where}: 'name' must be a string, got {value!r}")
    return value


def _entries(data: dict[str, Any], role: str) -> list[tuple[str, dict[str, Any]]]:
    raw = data.get(role, [])
    if not isinstance(raw, list):
        raise ConfigError(f"{role}: must be an array of tables, got {raw!r}")
    entries: list[tuple[str, dict[str, Any]]] = []
    for i, entry in enumerate(raw):
        where = f"{role}[{i}]"
        if not isinstance(entry, dict):
            raise ConfigError(f"{where}: must be a table, got {entry!r}")
        entries.append((where, entry))
    return entries


def _entry_symbols(entry: dict[str, Any], where: str) -> list[str]:
    raw = _field(entry, "symbols", where)
    if isinstance(raw, str):
        return list(raw)
    if isinstance(raw, list) and all(isinstance(s, str) for s in raw):
        return raw
    raise ConfigError(f"{where}: 'symbols' must be a string or a list of strings")


def _leading_entry(entry: dict[str, Any], where: str) -> OperatorSpec:
    name = _name(entry, where)
    kind = _field(entry, "kind", where)
    symbols = _entry_symbols(entry, where)
    if kind == "prefix":
        return prefix(name, symbols, _bp(entry, "right_bp", where))
    if kind == "paren":
        return paren_like(name, symbols)
    raise ConfigError(f"{where}: unknown leading kind {kind!r} (expected 'prefix' or 'paren')")


def _following_entry(entry: dict[str, Any], where: str) -> OperatorSpec:
    name = _name(entry, where)
    kind = _field(entry, "kind", where)
    symbols = _entry_symbols(entry, where)
    if kind == "postfix":
        return postfix(name, symbols, _bp(entry, "left_bp", where))
    if kind == "infix":
        return infix(
            name, symbols,
            _bp(entry, "left_bp", where), _bp(entry, "right_bp", where),
        )
    raise ConfigError(f"{where}: unknown following kind {kind!r} (expected 'postfix' or 'infix')")


def table_from_data(data: dict[str, Any]) -> OperatorTable:
    """Build an OperatorTable from the [[leading]] and [[following]] arrays."""
    try:
        leading = [_leading_entry(entry, where) for where, entry in _entries(data, "leading")]
        following = [
            _following_entry(entry, where) for where, entry in _entries(data, "following")
        ]
    except TableError as e:
        raise ConfigError(str(e)) from e
    return OperatorTable(leading, following)


def toml_string(value: str) -> str:
    """Quote value as a TOML basic string."""
    out: list[str] = []
    for ch in value:
        if ch in "\\\"":
            out.append("\\" + ch)
        elif ch != "\t" and (ord(ch) < 0x20 or ord(ch) == 0x7F):
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def table_to_toml(table: OperatorTable) -> str:
    """Serialize a table as [[leading]] / [[following]] arrays."""
    blocks: list[str] = []
    for op in table.leading:
        lines = ["[[leading]]", f"name = {toml_string(op.name)}"]
        if isinstance(op.kind, Prefix):
            lines.append('kind = "prefix"')
        elif isinstance(op.kind, ParenLike):
            lines.append('kind = "paren"')
        lines.append("symbols = [" + ", ".join(toml_string(s) for s in op.symbols) + "]")
        if isinstance(op.kind, Prefix):
            lines.append(f"right_bp = {op.kind.right_bp}")
        blocks.append("\n".join(lines))
    for op in table.following:
        lines = ["[[following]]", f"name = {toml_string(op.name)}"]
        if isinstance(op.kind, Postfix):
            lines.append('kind = "postfix"')
        elif isinstance(op.kind, Infix):
            lines.append('kind = "infix"')
        lines.append("symbols = [" + ", ".join(toml_string(s) for s in op.symbols) + "]")
        lines.append(f"left_bp = {op.kind.left_bp}")
        if isinstance(op.kind, Infix):
            lines.append(f"right_bp = {op.kind.right_bp}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n"
