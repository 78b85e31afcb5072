from collections.abc import Sequence
from dataclasses import dataclass

from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from ..conf import quote
from ..registry import RegistryVar
from ..spec import EnumOrigin


@dataclass(frozen=True, slots=True)
class SpecCliTheme:
    title: str = "#7C3AED"
    stage: str = "#00FFFF"
    error: str = "#F87171"
    origin_cmdline: str = "#FBBF24"
    origin_file: str = "#4ADE80"

    def select_origin_color(self, origin: EnumOrigin) -> str:
        if origin is EnumOrigin.CMDLINE:
            return self.origin_cmdline
        return self.origin_file


def render_text(text: str) -> str:
    """
    Make ``text`` safe to write to a UTF-8 terminal.

    Undecodable bytes carried as surrogate escapes (see ``unquote``) come
    out as ``\\xHH``; any other lone surrogate as ``\\uHHHH``.
    """
    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", "backslashreplace").decode("utf-8")
    return raw.decode("utf-8", "backslashreplace")


class ConsoleVars:
    """Render registry contents and parse errors with ``rich``.

    Every value is printed as a ``Text`` so that brackets in user input are
    never read as console markup.
    """

    def __init__(
        self, *, console: Console | None = None, theme: SpecCliTheme | None = None
    ):
        self.console = console or Console()
        self.theme = theme or SpecCliTheme()

    def title(self, text: str) -> None:
        self.console.rule(
            Text(text, style="bold"),
            style=Style(color=self.theme.title, bold=True),
            characters="=",
        )

    def stage(self, text: str) -> None:
        self.console.rule(Text(text), style=Style(color=self.theme.stage), characters="─")

    def _format_origins(self, registry: RegistryVar, idx: int) -> Text:
        l_origins = registry.list_origins(idx)
        if not l_origins:
            return Text("-")
        return Text(", ").join(
            Text(str(_o), style=Style(color=self.theme.select_origin_color(_o)))
            for _o in l_origins
        )

    def show_vars(self, registry: RegistryVar, *, title: str) -> None:
        """Print one row per var: flag, name, value and the origins that set it."""
        self.stage(title)
        table = Table(show_header=True, header_style="bold")
        table.add_column("flag")
        table.add_column("name")
        table.add_column("value")
        table.add_column("set from")
        for _idx, _spec in enumerate(registry):
            table.add_row(
                Text(render_text(_spec.flag or "-")),
                Text(_spec.name or "-"),
                Text(render_text(str(_spec.val))),
                self._format_origins(registry, _idx),
            )
        self.console.print(table)

    def show_conf(self, registry: RegistryVar, *, title: str) -> None:
        """Print the named vars that were set, as configuration-file lines."""
        self.stage(title)
        for _idx, _spec in enumerate(registry):
            if not _spec.name or not registry.is_seen(_idx):
                continue
            self.console.print(
                Text(f"{_spec.name} = {quote(str(_spec.val))}"), soft_wrap=True
            )

    def show_args(self, args: Sequence[str]) -> None:
        c_args = render_text(repr(list(args)))
        self.console.print(Text(f"residual arguments: {c_args}"), soft_wrap=True)

    def show_error(self, error: Exception) -> None:
        self.console.print(
            Text(render_text(str(error)), style=Style(color=self.theme.error)),
            soft_wrap=True,
        )
