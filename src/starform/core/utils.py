import asyncio
from typing import Dict, Iterable, Optional, TypeVar, Union

from ..reactivity.store import Readable

T = TypeVar('T')

FieldValue = Optional[Union[str, bool]]

def clone_values(values: Dict[str, FieldValue]) -> Dict[str, FieldValue]:
    """Structural copy of a field-value map; values are str, bool or None."""
    copy: Dict[str, FieldValue] = {}
    for key, value in values.items():
        if value is not None and not isinstance(value, (str, bool)):
            raise TypeError(f"Unsupported value for field {key!r}: {type(value).__name__}")
        copy[key] = value
    return copy

def assign(keys: Iterable[str], value: T) -> Dict[str, T]:
    return {key: value for key in keys}

async def subscribe_once(store: Readable[T]) -> T:
    """Resolve with the next value the store emits, then unsubscribe."""
    future = asyncio.get_running_loop().create_future()

    def resolve(value: T) -> None:
        if not future.done():
            future.set_result(value)

    unsubscribe = store.subscribe(resolve)
    try:
        return await future
    finally:
        unsubscribe()
