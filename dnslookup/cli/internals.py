import argparse
import dataclasses
from typing import Any, Self, TypeVar

_FLAG_ACTIONS = ("store_true", "store_false")
_MASK = "********"


def cli_arg(
    *names: str,
    required: bool = False,
    default=None,
    type: Any = str,
    help: str = "",
    action: str | None = None,
    secret: bool = False,
    **field_kwargs,
) -> Any:
    '''
    Declares a dataclass field that is also a command line argument.
    A single name without leading dashes (`"domain"`) becomes a positional
    argument. `secret` fields are masked by `ArgparseModel.show`.
    '''
    metadata: dict[str, Any] = {
        "names": names,
        "help": help,
        "required": required,
        "action": action,
        "secret": secret,
    }
    if action not in _FLAG_ACTIONS:
        metadata["type"] = type
    return dataclasses.field(default=default, metadata=metadata, **field_kwargs)


def _is_positional(names: tuple[str, ...]) -> bool:
    return len(names) == 1 and not names[0].startswith("-")


def _argument_kwargs(field: dataclasses.Field) -> dict[str, Any]:
    meta = field.metadata
    kwargs: dict[str, Any] = {
        "help": meta["help"],
        "default": None if field.default is dataclasses.MISSING else field.default,
    }
    if _is_positional(meta["names"]):
        # argparse names positionals after their only name
        if not meta["required"]:
            kwargs["nargs"] = "?"
    else:
        kwargs["dest"] = field.name
        kwargs["required"] = meta["required"]

    if meta["action"]:
        kwargs["action"] = meta["action"]
    if "type" in meta:
        kwargs["type"] = meta["type"]
    return kwargs


class ArgparseModel:
    '''
    Base for `@dataclass` argument models whose fields are declared with
    `cli_arg`.
    '''

    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        for field in dataclasses.fields(cls):  # type: ignore[arg-type]
            parser.add_argument(*field.metadata["names"], **_argument_kwargs(field))

    @classmethod
    def from_namespace(cls, namespace: argparse.Namespace) -> Self:
        known = {field.name for field in dataclasses.fields(cls)}  # type: ignore[arg-type]
        values = {key: value for key, value in vars(namespace).items() if key in known}
        return cls(**values)

    def show(self) -> str:
        """
        Lists the arguments that were set, with secrets masked.

        Returns
        -------
        str
        """
        lines = ["CLI Arguments:"]
        for field in dataclasses.fields(self):  # type: ignore[arg-type]
            value = getattr(self, field.name)
            if value is None:
                continue
            if field.metadata.get("secret"):
                value = _MASK
            lines.append(f" - {field.name}: {value}")
        return "\n".join(lines)


M = TypeVar("M", bound=ArgparseModel)


def get_argparse_arguments(
    parser: argparse.ArgumentParser,
    model: type[M],
    argv: list[str] | None = None,
) -> M:
    '''
    Registers `model` on `parser`, parses `argv` and builds the model.

    Parameters
    ----------
    parser : argparse.ArgumentParser
    model : type[M]
    argv : list[str] | None
        _sys.argv[1:] when omitted_

    Returns
    -------
    M

    Raises
    ------
    SystemExit
        _the arguments are invalid, or --help/--version was passed_
    '''
    model.register(parser)
    namespace = parser.parse_args(argv)
    try:
        return model.from_namespace(namespace)
    except TypeError as exc:
        parser.error(f"cannot build {model.__name__}: {exc}")
        raise
