from __future__ import annotations

import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from confkit.registry import RegistryVar  # noqa: E402
from confkit.spec import EnumArgKind, EnumOrigin, SpecVar, StringValue  # noqa: E402


def _build_registry() -> RegistryVar:
    return RegistryVar().register_vars(
        SpecVar(val=StringValue(), flag="c"),
        SpecVar(val=StringValue(), flag="s", name="string"),
        SpecVar(val=StringValue(), name="only-in-file", required=True),
    )


def test_registry_resolves_flags_and_names_to_slots() -> None:
    reg = _build_registry()

    assert len(reg) == 3
    assert reg.select_by_flag("c") == 0
    assert reg.select_by_flag("s") == 1
    assert reg.select_by_name("string") == 1
    assert reg.select_by_name("only-in-file") == 2
    assert reg.select_by_flag("x") is None
    assert reg.select_by_name("") is None
    assert reg.select_by_flag("") is None
    assert [s.label for s in reg] == ["c", "string", "only-in-file"]


def test_registry_rejects_duplicate_flag_and_name() -> None:
    reg = _build_registry()

    with pytest.raises(ValueError, match="Flag already registered"):
        reg.register_var(SpecVar(val=StringValue(), flag="s"))
    with pytest.raises(ValueError, match="Name already registered"):
        reg.register_var(SpecVar(val=StringValue(), flag="z", name="string"))
    assert len(reg) == 3


def test_spec_var_validates_flag_and_name() -> None:
    with pytest.raises(ValueError, match="single character"):
        SpecVar(val=StringValue(), flag="ab")
    with pytest.raises(ValueError, match="Invalid `name`"):
        SpecVar(val=StringValue(), name="has space")
    with pytest.raises(ValueError, match="Invalid `name`"):
        SpecVar(val=StringValue(), name="9lives")

    spec = SpecVar(val=StringValue(), name="--")
    assert spec.kind is EnumArgKind.HAS_ARG
    assert spec.required is False


def test_origin_markers_are_independent_per_slot() -> None:
    reg = _build_registry()

    reg.mark(1, EnumOrigin.CMDLINE)
    assert reg.is_set(1, EnumOrigin.CMDLINE)
    assert not reg.is_set(1, EnumOrigin.FILE)
    assert reg.is_seen(1)
    assert not reg.is_seen(0)

    reg.mark(1, EnumOrigin.FILE)
    assert reg.list_origins(1) == [EnumOrigin.CMDLINE, EnumOrigin.FILE]

    assert reg.list_origins(0) == []


def test_missing_required_tracks_either_origin() -> None:
    reg = _build_registry()
    assert [s.name for s in reg.iter_missing_required()] == ["only-in-file"]

    reg.mark(2, EnumOrigin.CMDLINE)
    assert list(reg.iter_missing_required()) == []
