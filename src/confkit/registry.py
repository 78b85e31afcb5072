from collections.abc import Iterable, Iterator
from typing import Self

from loguru import logger

from .spec import EnumOrigin, SpecVar


class RegistryVar:
    """Ordered registry of setting specs with per-origin "already set" markers.

    Specs are stored in registration order; each one is addressed by its slot
    index. The markers live in a parallel list of origin sets, so the specs
    stay immutable and both parsers share one source of truth for precedence:
    a slot may be set once from the command line and once from a file, and a
    file value is skipped when the command line already set the slot.

    Examples:
        >>> from confkit.spec import StringValue
        >>> reg = RegistryVar([SpecVar(val=StringValue(), flag="s", name="string")])
        >>> reg.select_by_name("string")
        0
        >>> reg.select_by_flag("x") is None
        True
    """

    def __init__(self, specs: Iterable[SpecVar] = ()) -> None:
        """Initialize the registry, registering ``specs`` in order."""
        self._specs: list[SpecVar] = []
        self._origins: list[set[EnumOrigin]] = []
        self._idx_by_flag: dict[str, int] = {}
        self._idx_by_name: dict[str, int] = {}
        for spec in specs:
            self.register_var(spec)

    def register_var(self, spec: SpecVar) -> int:
        """Register one setting spec.

        Args:
            spec: Setting description.

        Returns:
            int: Slot index of the registered spec.

        Raises:
            ValueError: If the flag or name is already registered.
        """
        if spec.flag and spec.flag in self._idx_by_flag:
            raise ValueError(f"Flag already registered: {spec.flag!r}")
        if spec.name and spec.name in self._idx_by_name:
            raise ValueError(f"Name already registered: {spec.name!r}")
        if not spec.flag and not spec.name:
            logger.warning(
                "Registered a var with neither flag nor name; it can never be set: {}",
                spec,
            )

        idx = len(self._specs)
        self._specs.append(spec)
        self._origins.append(set())
        if spec.flag:
            self._idx_by_flag[spec.flag] = idx
        if spec.name:
            self._idx_by_name[spec.name] = idx
        return idx

    def register_vars(self, *specs: SpecVar) -> Self:
        """Register several specs; returns ``self`` for fluent chaining."""
        for spec in specs:
            self.register_var(spec)
        return self

    def __len__(self) -> int:
        return len(self._specs)

    def __iter__(self) -> Iterator[SpecVar]:
        return iter(self._specs)

    def select_var(self, idx: int) -> SpecVar:
        return self._specs[idx]

    def select_by_flag(self, flag: str) -> int | None:
        """Return the slot whose short flag is ``flag``, or ``None``."""
        if not flag:
            return None
        return self._idx_by_flag.get(flag)

    def select_by_name(self, name: str) -> int | None:
        """Return the slot whose long name is ``name``, or ``None``."""
        if not name:
            return None
        return self._idx_by_name.get(name)

    def mark(self, idx: int, origin: EnumOrigin) -> None:
        self._origins[idx].add(origin)

    def is_set(self, idx: int, origin: EnumOrigin) -> bool:
        return origin in self._origins[idx]

    def is_seen(self, idx: int) -> bool:
        """Whether the slot was set (or seen) from any origin."""
        return bool(self._origins[idx])

    def list_origins(self, idx: int) -> list[EnumOrigin]:
        return sorted(self._origins[idx])

    def iter_missing_required(self) -> Iterator[SpecVar]:
        """Yield required specs not set from any origin, in registration order."""
        for _idx, _spec in enumerate(self._specs):
            if _spec.required and not self._origins[_idx]:
                yield _spec
