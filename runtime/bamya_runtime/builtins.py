"""
Bamya built-in functions

Builtins receive already-evaluated arguments and report misuse by returning
Error objects, the same as the evaluator does.
"""

from typing import Callable, Dict, Optional

from .objects import (
    NULL, Array, BamyaObject, Builtin, Integer, ObjectType, String, new_error,
)

OutputSink = Callable[[str], None]


def _wrong_arg_count(got: int, wanted: int):
    return new_error(f"wrong number of arguments. got={got}, wanted={wanted}")


def _len(*args: BamyaObject) -> BamyaObject:
    if len(args) != 1:
        return _wrong_arg_count(len(args), 1)

    arg = args[0]
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    if isinstance(arg, String):
        return Integer(len(arg.value))
    return new_error(f"argument to `len` not supported, got {arg.type()}")


def _first(*args: BamyaObject) -> BamyaObject:
    if len(args) != 1:
        return _wrong_arg_count(len(args), 1)
    if args[0].type() != ObjectType.ARRAY:
        return new_error(f"argument to `first` must be ARRAY, got {args[0].type()}")

    elements = args[0].elements
    return elements[0] if elements else NULL


def _last(*args: BamyaObject) -> BamyaObject:
    if len(args) != 1:
        return _wrong_arg_count(len(args), 1)
    if args[0].type() != ObjectType.ARRAY:
        return new_error(f"argument to `last` must be ARRAY, got {args[0].type()}")

    elements = args[0].elements
    return elements[-1] if elements else NULL


def _rest(*args: BamyaObject) -> BamyaObject:
    if len(args) != 1:
        return _wrong_arg_count(len(args), 1)
    if args[0].type() != ObjectType.ARRAY:
        return new_error(f"argument to `rest` must be ARRAY, got {args[0].type()}")

    elements = args[0].elements
    if not elements:
        return NULL
    return Array(list(elements[1:]))


def _push(*args: BamyaObject) -> BamyaObject:
    if len(args) != 2:
        return _wrong_arg_count(len(args), 2)
    if args[0].type() != ObjectType.ARRAY:
        return new_error(f"argument to `push` must be ARRAY, got {args[0].type()}")

    return Array(list(args[0].elements) + [args[1]])


def _make_log(output: OutputSink) -> Callable[..., BamyaObject]:
    def _log(*args: BamyaObject) -> BamyaObject:
        for arg in args:
            output(arg.inspect())
        return NULL
    return _log


def make_builtins(output: Optional[OutputSink] = None) -> Dict[str, Builtin]:
    """
    Build the builtin table

    Args:
        output: sink for `log`, called once per argument with its rendering.
            Defaults to print.

    Returns:
        Mapping of name to Builtin
    """
    if output is None:
        output = print

    return {
        'len': Builtin(_len),
        'first': Builtin(_first),
        'last': Builtin(_last),
        'rest': Builtin(_rest),
        'push': Builtin(_push),
        'log': Builtin(_make_log(output)),
    }


BUILTINS = make_builtins()


__all__ = ['make_builtins', 'BUILTINS', 'OutputSink']
