"""Scaffolding for `bindpower init`."""

from __future__ import annotations

from pathlib import Path

from bindpower.config import CONFIG_NAME, table_to_toml, toml_string
from bindpower.operators import OperatorTable, default_table

_HEADER_TEMPLATE = """\
# Operator table for bindpower.
# Leading operators match where an expression starts; following operators
# match after a complete operand. Earlier entries win on a shared symbol.

[table]
name = {name}

[output]
color = true
tree = false

"""

_EXAMPLES_BPX = """\
# One expression per line.
1+2*3
1*(2+3)
-1*2?
1=2=I(3)T(4)E(5[6])
"""


def scaffold(directory: Path | None = None, table: OperatorTable | None = None) -> Path:
    """Write bindpower.toml and an examples.bpx into directory. Returns the config path."""
    base = directory or Path.cwd()
    config_path = base / CONFIG_NAME

    if config_path.exists():
        raise FileExistsError(f"{config_path} already exists")

    base.mkdir(parents=True, exist_ok=True)
    header = _HEADER_TEMPLATE.format(name=toml_string(base.resolve().name or "default"))
    config_path.write_text(header + table_to_toml(table or default_table()))

    examples = base / "examples.bpx"
    if not examples.exists():
        examples.write_text(_EXAMPLES_BPX)

    return config_path
