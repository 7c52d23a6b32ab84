from typing import Any, Iterable, List

def flatten_args(args: Iterable[Any]) -> List[Any]:
    # flattens variadic arguments that may themselves be lists or tuples.
    flat: List[Any] = []
    for arg in args:
        if isinstance(arg, (list, tuple)):
            flat.extend(flatten_args(arg))
        elif arg is not None:
            flat.append(arg)
    return flat

def clean_extension(extension: str) -> str:
    # strips a single leading dot so ".json" and "json" compare equal.
    if extension.startswith("."):
        return extension[1:]
    return extension
