"""
Lovelace amount normalization.

Blockfrost reports amounts either as a list of ``{unit, quantity}`` entries
(multi-asset bundles) or, on some endpoints, as a bare quantity. Quantities
can exceed 2**53, so they are parsed as Python ints and returned as decimal
strings; floats never enter the arithmetic.
"""

import re
from typing import Any, Iterable, List, Mapping, Optional, Union

from explorer.errors import ErrorKind, ExplorerError
from explorer.models.blockchain import Asset

LOVELACE = "lovelace"

_INTEGER = re.compile(r"-?[0-9]+")

AmountEntries = Union[None, str, int, Iterable[Any]]


def _parse_quantity(quantity: Any) -> int:
    # bool is an int subclass; reject it along with floats
    if isinstance(quantity, int) and not isinstance(quantity, bool):
        return quantity
    if isinstance(quantity, str):
        text = quantity.strip()
        if _INTEGER.fullmatch(text):
            return int(text)
    raise ExplorerError(
        ErrorKind.UPSTREAM,
        f"Malformed amount quantity: {quantity!r}",
        code="malformed_amount",
    )


def _field(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def total_base_units(entries: AmountEntries) -> str:
    """
    Sum the lovelace entries of ``entries`` and return the total as a string.

    Accepts a list of ``{unit, quantity}`` mappings (or ``Asset`` models), a
    scalar quantity, or ``None``. Non-lovelace units never contribute.
    """
    if entries is None:
        return "0"
    if isinstance(entries, (str, int)) and not isinstance(entries, bool):
        return str(_parse_quantity(entries))

    total = 0
    for entry in entries:
        if _field(entry, "unit") == LOVELACE:
            total += _parse_quantity(_field(entry, "quantity"))
    return str(total)


def split_assets(entries: AmountEntries) -> List[Asset]:
    """Return the non-lovelace entries as ``Asset`` models, order preserved"""
    if entries is None or isinstance(entries, (str, int)):
        return []
    return [
        Asset(unit=_field(entry, "unit"), quantity=str(_parse_quantity(_field(entry, "quantity"))))
        for entry in entries
        if _field(entry, "unit") != LOVELACE
    ]


def has_lovelace(entries: AmountEntries) -> bool:
    if entries is None:
        return False
    if isinstance(entries, (str, int)):
        return True
    return any(_field(entry, "unit") == LOVELACE for entry in entries)


def sum_utxo_amounts(utxos: Optional[Iterable[Mapping[str, Any]]]) -> str:
    """Total lovelace across UTXO records that each carry an ``amount`` list"""
    total = 0
    for utxo in utxos or []:
        total += int(total_base_units(utxo.get("amount")))
    return str(total)
