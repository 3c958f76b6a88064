from __future__ import annotations

import functools
import operator
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")


class EmptyListError(Exception): ...


class IndexOutOfRangeError(IndexError): ...


class PersistentList(Generic[T]):
    """Immutable singly-linked list; either `Nil` or a `Cons` cell sharing its tail."""

    def __iter__(self) -> Iterator[T]:
        node: PersistentList[T] = self
        while isinstance(node, Cons):
            yield node.head
            node = node.tail

    def __len__(self) -> int:
        return length(self)

    def __bool__(self) -> bool:
        return not is_empty(self)

    def __getitem__(self, index: int) -> T:
        return at(self, operator.index(index))

    def __add__(self, other: Any) -> PersistentList[Any]:
        if not isinstance(other, PersistentList):
            return NotImplemented
        return concat(self, other)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PersistentList):
            return NotImplemented
        return equals(self, other)

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        if is_empty(self):
            return "Nil"
        return "List(" + ", ".join(map(repr, self)) + ")"


@dataclass(frozen=True, eq=False, repr=False)
class Cons(PersistentList[T]):
    head: T
    tail: PersistentList[T]

    def __post_init__(self):
        if not isinstance(self.tail, PersistentList):
            raise TypeError(f"cannot prepend to {type(self.tail).__name__}")


@dataclass(frozen=True, eq=False, repr=False)
class Empty(PersistentList[Any]): ...


Nil = Empty()


@dataclass(frozen=True)
class Some(Generic[T]):
    value: T


def List(*elements: T) -> PersistentList[T]:
    return _prepend_all(elements, Nil)


def from_iterable(iterable: Iterable[T]) -> PersistentList[T]:
    if isinstance(iterable, PersistentList):
        return iterable
    return _prepend_all(list(iterable), Nil)


def _prepend_all(elements: Iterable[T], tail: PersistentList[T]) -> PersistentList[T]:
    for element in reversed(tuple(elements)):
        tail = Cons(element, tail)
    return tail


def _check_list(list_: Any, operation: str) -> None:
    if not isinstance(list_, PersistentList):
        raise TypeError(f"{operation} expects a PersistentList, not {type(list_).__name__}")


def to_list(list_: PersistentList[T]) -> list[T]:
    _check_list(list_, "to_list")
    return list(list_)


def empty() -> PersistentList[Any]:
    return Nil


def cons(element: T, list_: PersistentList[T]) -> PersistentList[T]:
    return Cons(element, list_)


def is_empty(list_: PersistentList[Any]) -> bool:
    _check_list(list_, "is_empty")
    return not isinstance(list_, Cons)


def same(a: PersistentList[Any], b: PersistentList[Any]) -> bool:
    """Reference identity, as opposed to `equals`."""
    return a is b


def head(list_: PersistentList[T]) -> T:
    _check_list(list_, "head")
    match list_:
        case Cons(value, _):
            return value
    raise EmptyListError("head of empty list")


def head_option(list_: PersistentList[T]) -> Optional[Some[T]]:
    _check_list(list_, "head_option")
    match list_:
        case Cons(value, _):
            return Some(value)
    return None


def tail(list_: PersistentList[T]) -> PersistentList[T]:
    _check_list(list_, "tail")
    match list_:
        case Cons(_, rest):
            return rest
    raise EmptyListError("tail of empty list")


def at(list_: PersistentList[T], index: int) -> T:
    _check_list(list_, "at")
    index = operator.index(index)
    if index >= 0:
        node = list_
        for _ in range(index):
            if not isinstance(node, Cons):
                break
            node = node.tail
        else:
            if isinstance(node, Cons):
                return node.head
    raise IndexOutOfRangeError(f"index {index} out of range for list of length {length(list_)}")


def length(list_: PersistentList[Any]) -> int:
    _check_list(list_, "length")
    return sum(1 for _ in list_)


def reverse(list_: PersistentList[T]) -> PersistentList[T]:
    _check_list(list_, "reverse")
    result: PersistentList[T] = Nil
    for element in list_:
        result = Cons(element, result)
    return result


def map_(list_: PersistentList[T], function: Callable[[T], U]) -> PersistentList[U]:
    _check_list(list_, "map_")
    return _prepend_all([function(element) for element in list_], Nil)


def filter_(list_: PersistentList[T], predicate: Callable[[T], bool]) -> PersistentList[T]:
    _check_list(list_, "filter_")
    return _prepend_all([element for element in list_ if predicate(element)], Nil)


def filter_not(list_: PersistentList[T], predicate: Callable[[T], bool]) -> PersistentList[T]:
    _check_list(list_, "filter_not")
    return _prepend_all([element for element in list_ if not predicate(element)], Nil)


def reduce_left(list_: PersistentList[T], combine: Callable[[T, T], T]) -> T:
    """Left fold seeded with the first element."""
    _check_list(list_, "reduce_left")
    match list_:
        case Cons(first, rest):
            return functools.reduce(combine, rest, first)
    raise EmptyListError("reduce_left of empty list")


def fold_left(list_: PersistentList[T], seed: A, combine: Callable[[A, T], A]) -> A:
    _check_list(list_, "fold_left")
    return functools.reduce(combine, list_, seed)


def concat(a: PersistentList[T], b: PersistentList[T]) -> PersistentList[T]:
    """Elements of `a` followed by `b`; `b` itself becomes the shared suffix."""
    _check_list(a, "concat")
    _check_list(b, "concat")
    if is_empty(b):
        return a
    return _prepend_all(a, b)


def equals(a: PersistentList[Any], b: PersistentList[Any]) -> bool:
    _check_list(a, "equals")
    _check_list(b, "equals")
    while isinstance(a, Cons) and isinstance(b, Cons):
        if a is b:
            return True
        if a.head != b.head:
            return False
        a, b = a.tail, b.tail
    return is_empty(a) and is_empty(b)


def from_range(lo: int, hi: int) -> PersistentList[int]:
    """Consecutive integers from `lo` to `hi` inclusive."""
    result: PersistentList[int] = Nil
    for value in range(hi, lo - 1, -1):
        result = Cons(value, result)
    return result
