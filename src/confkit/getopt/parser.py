import sys
import unicodedata
from collections.abc import Sequence

from loguru import logger

from ..defaults import C_PARAM_FALSE, C_PARAM_TRUE
from ..errors import (
    MSG_ALREADY_SET,
    MSG_END_JUNK,
    MSG_ILLEGAL_OPTION,
    MSG_NO_ARG,
    MSG_REQUIRED,
    MSG_SYNTAX,
    FlagError,
)
from ..registry import RegistryVar
from ..spec import EnumArgKind, EnumDialect, EnumOrigin, LineValue
from .tokenizer import EnumArgClass, SpecFlagToken, classify_arg, split_flag


class ParserGetOpt:
    """Command-line parser shared by the three dialects.

    The dialect only changes how arguments are classified (see
    ``classify_arg``); flag lookup, parameter consumption and dispatch to the
    ``Value`` setters are common.

    Attributes:
        registry: Settings registry receiving the values.
        dialect: Command-line dialect.
        args: Residual arguments. Filled by :meth:`parse`; a LINE_ARG setter
            implementing ``set_line`` receives this list and may consume it.
    """

    def __init__(self, registry: RegistryVar, dialect: EnumDialect) -> None:
        self.registry = registry
        self.dialect = dialect
        self.args: list[str] = []

    def _select(self, arg_class: EnumArgClass, token: SpecFlagToken) -> int:
        if arg_class is EnumArgClass.SHORT_FLAG:
            if unicodedata.category(token.flag) == "Cs":
                raise FlagError(token.flag, token.long, "", MSG_SYNTAX)
            idx = self.registry.select_by_flag(token.flag)
        else:
            idx = self.registry.select_by_name(token.long)
        if idx is None:
            raise FlagError(token.flag, token.long, "", MSG_ILLEGAL_OPTION)
        return idx

    def _parse_cluster(self, arg_class: EnumArgClass, text: str) -> bool:
        """Process the flags of one argument.

        Returns:
            bool: ``True`` if a LINE_ARG flag ended option processing.
        """
        while text:
            token = split_flag(text, arg_class)
            text = token.rest
            c_flag, c_long = token.flag, token.long

            idx = self._select(arg_class, token)
            if self.registry.is_set(idx, EnumOrigin.CMDLINE):
                raise FlagError(c_flag, c_long, "", MSG_ALREADY_SET)
            spec = self.registry.select_var(idx)

            c_param = ""
            if arg_class is EnumArgClass.FALSE_FLAG:
                if spec.kind is not EnumArgKind.NO_ARG:
                    raise FlagError(c_flag, c_long, "", MSG_ILLEGAL_OPTION)
                c_param = C_PARAM_FALSE
            elif spec.kind is EnumArgKind.NO_ARG:
                if token.if_has_value:
                    raise FlagError("", c_long, "", MSG_END_JUNK)
                c_param = C_PARAM_TRUE
            elif spec.kind is EnumArgKind.LINE_ARG:
                if text:
                    raise FlagError("", "", text, MSG_END_JUNK)
            elif text:
                c_param, text = text, ""
            elif token.if_has_value:
                pass  # "--name=": empty parameter
            elif self.args:
                c_param = self.args.pop(0)
            else:
                raise FlagError(c_flag, c_long, "", MSG_NO_ARG)

            try:
                if spec.kind is EnumArgKind.LINE_ARG and isinstance(spec.val, LineValue):
                    spec.val.set_line(self.args)
                else:
                    spec.val.set(c_param)
            except ValueError as e:
                c_shown = "" if spec.kind is EnumArgKind.NO_ARG else c_param
                raise FlagError(c_flag, c_long, c_shown, e) from e
            self.registry.mark(idx, EnumOrigin.CMDLINE)

            if spec.kind is EnumArgKind.LINE_ARG:
                logger.debug("Option processing ended by `{}`", spec.label)
                return True
        return False

    def check_required(self) -> None:
        """Raise for the first required var set from neither origin."""
        for spec in self.registry.iter_missing_required():
            raise FlagError(spec.flag, spec.name, "", MSG_REQUIRED)

    def parse(self, argv: Sequence[str], *, if_check_required: bool = False) -> list[str]:
        """
        Parse ``argv`` (program name excluded).

        Args:
            argv: Arguments to parse.
            if_check_required: Whether to fail on required vars left unset.
                The check runs last, after a LINE_ARG setter consumed its
                arguments.

        Returns:
            list[str]: Residual arguments (a copy of ``self.args``).

        Raises:
            FlagError: On the first unknown flag, missing or superfluous
                parameter, repeated flag or setter failure.
        """
        self.args = list(argv)
        while self.args:
            arg_class, text = classify_arg(self.args[0], self.dialect)
            if arg_class is EnumArgClass.END_ARG:
                logger.debug("Option processing stopped at {!r}", self.args[0])
                break
            del self.args[0]
            if arg_class is EnumArgClass.END_ARG_SKIP:
                logger.debug("Option processing stopped at '--'")
                break
            if self._parse_cluster(arg_class, text):
                break

        if if_check_required:
            self.check_required()
        return list(self.args)


def _resolve_argv(argv: Sequence[str] | None) -> Sequence[str]:
    return sys.argv[1:] if argv is None else argv


def getopt(
    registry: RegistryVar,
    argv: Sequence[str] | None = None,
    *,
    if_check_required: bool = False,
) -> list[str]:
    """
    Parse short flags in the traditional Unix manner.

    Processing stops at the first argument that is not a flag cluster
    (``-`` alone, or not starting with ``-``) and after ``--``, which is
    dropped. The ``name`` of each var is ignored.

    In a cluster, a NO_ARG flag gets ``"true"`` and the next character is
    examined; a HAS_ARG flag takes the rest of the cluster, or else the next
    argument; a LINE_ARG flag must end the cluster and ends processing.

    With ``n`` as NO_ARG and ``h`` as HAS_ARG these are equivalent::

        -n -h param -- arg0 arg1
        -nh param arg0 arg1
        -nhparam arg0 arg1

    Returns:
        list[str]: Residual arguments.
    """
    return ParserGetOpt(registry, EnumDialect.GETOPT).parse(
        _resolve_argv(argv), if_check_required=if_check_required
    )


def getopt_long(
    registry: RegistryVar,
    argv: Sequence[str] | None = None,
    *,
    if_check_required: bool = False,
) -> list[str]:
    """
    Parse GNU-style options: ``getopt`` plus ``--name`` and ``--name=value``.

    ``=value`` is only allowed on HAS_ARG vars; a bare ``--name`` on a
    HAS_ARG var takes the next argument.

    Returns:
        list[str]: Residual arguments.
    """
    return ParserGetOpt(registry, EnumDialect.GETOPT_LONG).parse(
        _resolve_argv(argv), if_check_required=if_check_required
    )


def getopt_long_only(
    registry: RegistryVar,
    argv: Sequence[str] | None = None,
    *,
    if_check_required: bool = False,
) -> list[str]:
    """
    Parse X11-style options: every flag is a long name after ``-`` or ``+``.

    ``-name`` hands ``"true"`` to a NO_ARG var and ``+name`` hands it
    ``"false"``; ``+`` is illegal on other kinds. HAS_ARG vars take the next
    argument. The ``flag`` of each var is ignored.

    With ``t``, ``f`` as NO_ARG and ``h`` as HAS_ARG, ``-t +f -h param arg0
    arg1`` sets t, clears f, sets h to ``"param"`` and leaves
    ``["arg0", "arg1"]``.

    Returns:
        list[str]: Residual arguments.
    """
    return ParserGetOpt(registry, EnumDialect.GETOPT_LONG_ONLY).parse(
        _resolve_argv(argv), if_check_required=if_check_required
    )
