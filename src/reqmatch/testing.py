"""Test utilities for reqmatch.

Short constructors for every expectation variant, to keep test tables and
examples readable:

    >>> from reqmatch.testing import method, q_eq
    >>> method("GET"), q_eq("page", "2")
    (Method(value='GET'), QueryEq(key='page', value='2'))

These are conveniences only; the variant classes are the real API.
"""

from __future__ import annotations

from reqmatch._expectation import (
    BodyEq,
    BodyMiss,
    FragmentEq,
    FragmentMiss,
    HeaderEq,
    HeaderExists,
    HeaderMiss,
    Method,
    Path,
    QueryEq,
    QueryExists,
    QueryMiss,
)


def method(value: str) -> Method:
    return Method(value)


def path(value: str) -> Path:
    return Path(value)


def q_eq(key: str, value: str) -> QueryEq:
    return QueryEq(key, value)


def q_ex(key: str) -> QueryExists:
    return QueryExists(key)


def q_miss(key: str) -> QueryMiss:
    return QueryMiss(key)


def h_eq(key: str, value: str) -> HeaderEq:
    return HeaderEq(key, value)


def h_ex(key: str) -> HeaderExists:
    return HeaderExists(key)


def h_miss(key: str) -> HeaderMiss:
    return HeaderMiss(key)


def f_eq(value: str) -> FragmentEq:
    return FragmentEq(value)


def f_miss() -> FragmentMiss:
    return FragmentMiss()


def b_eq(value: str) -> BodyEq:
    return BodyEq(value)


def b_miss() -> BodyMiss:
    return BodyMiss()
