"""Optional query parameters for Reverse IP/DNS API requests."""

from __future__ import annotations

from collections.abc import Iterable, MutableMapping
from dataclasses import dataclass


@dataclass(frozen=True)
class Option:
    """A single query parameter.

    Options are applied in the order given. Each one overwrites whatever
    an earlier option stored under the same key.
    """

    key: str
    value: str

    def apply(self, params: MutableMapping[str, str]) -> None:
        params[self.key] = self.value

    __call__ = apply


def output_format(value: str) -> Option:
    """Response output format: JSON | XML. Default: JSON.

    Only the raw path honours it; parsed lookups always request JSON.
    """
    return Option("outputFormat", value.upper())


def from_domain(value: str) -> Option:
    """Domain name used as the offset for the returned results.

    Pass the last domain name of the previous page to fetch the next one.
    """
    return Option("from", value)


def apply_options(
    params: MutableMapping[str, str], options: Iterable[Option]
) -> MutableMapping[str, str]:
    for option in options:
        option.apply(params)
    return params
