# pos_register/models/cart.py
import logging
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


# Represents a single product (code + quantity) within the cart
@dataclass
class CartLine:
    code: str  # Unique key within the cart
    name: str  # Name snapshot at the moment of first addition
    price: int  # Unit price snapshot (smallest currency unit)
    qty: int = 1
    product_id: Optional[int] = None  # Carried through from the lookup, if any

    @property
    def line_total(self) -> int:
        return self.price * self.qty


def parse_price(value) -> Optional[int]:
    """Return ``value`` as a non-negative integer price, or ``None`` if it is not one.

    Accepts ints, integral floats and digit strings (operator-typed prices
    arrive as text). Booleans are rejected even though they are ints.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float):
        return int(value) if value.is_integer() and value >= 0 else None
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            return int(text)
    return None


class Cart:
    """In-progress list of purchase lines for one transaction.

    Lines keep first-add order. Adding a code that is already in the cart
    bumps its quantity and keeps the name and price from the first add.
    """

    def __init__(self) -> None:
        self._lines: List[CartLine] = []

    def add_line(self, code: str, name: str, price, product_id: Optional[int] = None) -> Optional[CartLine]:
        # Incomplete staging (no name or no usable price) is ignored
        unit_price = parse_price(price)
        if not name or not str(name).strip() or unit_price is None:
            logger.debug("Ignoring incomplete line code=%r name=%r price=%r", code, name, price)
            return None

        existing = self._find(code)
        if existing:
            existing.qty += 1
            return replace(existing)

        line = CartLine(code=code, name=name, price=unit_price, qty=1, product_id=product_id)
        self._lines.append(line)
        return replace(line)

    def lines(self) -> Tuple[CartLine, ...]:
        # Copies, so callers cannot change quantities behind the cart's back
        return tuple(replace(line) for line in self._lines)

    def subtotal(self) -> int:
        return sum(line.price * line.qty for line in self._lines)

    def item_count(self) -> int:
        return sum(line.qty for line in self._lines)

    def clear(self) -> None:
        self._lines.clear()

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def _find(self, code: str) -> Optional[CartLine]:
        for line in self._lines:
            if line.code == code:
                return line
        return None

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self.lines())
