"""
Pricing Engine - pure price computation for order selections.

Pricing rules:
    whole          quantity x whole
    pieces/mixed   quantity x mixed_piece
    pieces/custom  sum(piece count x piece price); quantity is the piece total
    generic        quantity x option price, option resolved by (variation, option)

Missing or zero unit prices contribute zero. Nothing here touches the
database: callers pass immutable snapshots of the price table and the
product's variations.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Sequence, Tuple

ZERO = Decimal('0.00')
CENTS = Decimal('0.01')

WHOLE = 'whole'
PIECES = 'pieces'
MIXED = 'mixed'
CUSTOM = 'custom'

PIECE_TYPES = ('breasts', 'thighs', 'drumsticks', 'wings')


def to_decimal(value) -> Decimal:
    """Coerce a unit price to Decimal; missing or invalid values count as zero."""
    if value is None or value == '':
        return ZERO
    try:
        amount = Decimal(str(value))
    except ArithmeticError:
        return ZERO
    if amount.is_nan() or amount < 0:
        return ZERO
    return amount


def money(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS)


@dataclass(frozen=True)
class PieceDetails:
    breasts: int = 0
    thighs: int = 0
    drumsticks: int = 0
    wings: int = 0

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'PieceDetails':
        data = data or {}
        return cls(**{piece: int(data.get(piece) or 0) for piece in PIECE_TYPES})

    def as_dict(self) -> dict:
        return {piece: getattr(self, piece) for piece in PIECE_TYPES}

    @property
    def total(self) -> int:
        return sum(getattr(self, piece) for piece in PIECE_TYPES)


@dataclass(frozen=True)
class PriceSnapshot:
    """Immutable copy of the chicken price table used for one computation."""
    whole: Decimal = ZERO
    mixed_piece: Decimal = ZERO
    breasts: Decimal = ZERO
    thighs: Decimal = ZERO
    drumsticks: Decimal = ZERO
    wings: Decimal = ZERO
    is_choose_pieces_enabled: bool = True

    @classmethod
    def from_price_table(cls, table) -> 'PriceSnapshot':
        """Build a snapshot from a PriceTable row or any object with the same attributes."""
        return cls(
            whole=to_decimal(getattr(table, 'whole', None)),
            mixed_piece=to_decimal(getattr(table, 'mixed_piece', None)),
            breasts=to_decimal(getattr(table, 'breasts', None)),
            thighs=to_decimal(getattr(table, 'thighs', None)),
            drumsticks=to_decimal(getattr(table, 'drumsticks', None)),
            wings=to_decimal(getattr(table, 'wings', None)),
            is_choose_pieces_enabled=bool(getattr(table, 'is_choose_pieces_enabled', True)),
        )

    def piece_price(self, piece: str) -> Decimal:
        return to_decimal(getattr(self, piece, None))


@dataclass(frozen=True)
class OptionSnapshot:
    name: str
    price: Decimal = ZERO
    profit: Decimal = ZERO


@dataclass(frozen=True)
class VariationSnapshot:
    name: str
    options: Tuple[OptionSnapshot, ...] = ()


@dataclass(frozen=True)
class ChickenSelection:
    chicken_type: str
    pieces_type: Optional[str] = None
    quantity: int = 1
    piece_details: PieceDetails = field(default_factory=PieceDetails)

    @property
    def is_custom(self) -> bool:
        return self.chicken_type == PIECES and self.pieces_type == CUSTOM

    @property
    def is_mixed(self) -> bool:
        return self.chicken_type == PIECES and self.pieces_type == MIXED


@dataclass(frozen=True)
class GenericSelection:
    product_id: int
    option_name: str
    variation_name: str = ''
    quantity: int = 1


@dataclass(frozen=True)
class QuantityPolicy:
    """Quantity floors and the mixed-piece stepping rule (2, 5, 10, 15, ...)."""
    whole_min_quantity: int = 1
    mixed_min_quantity: int = 2
    mixed_first_step: int = 5
    mixed_step: int = 5
    generic_min_quantity: int = 1

    @classmethod
    def from_settings(cls, values: Optional[dict]) -> 'QuantityPolicy':
        values = values or {}
        return cls(**{
            name: int(values[name.upper()])
            for name in cls.__dataclass_fields__
            if name.upper() in values
        })


def variations_from_product(product) -> Tuple[VariationSnapshot, ...]:
    """Snapshot a catalog product's variation tree."""
    return tuple(
        VariationSnapshot(
            name=variation.name,
            options=tuple(
                OptionSnapshot(
                    name=option.name,
                    price=to_decimal(option.price),
                    profit=to_decimal(option.profit),
                )
                for option in variation.options.all()
            )
        )
        for variation in product.variations.all()
    )


def select_variation(
    variations: Sequence[VariationSnapshot],
    variation_name: str = ''
) -> Tuple[Optional[VariationSnapshot], Optional[OptionSnapshot]]:
    """
    Pick a variation and reset the option to its first entry.

    An empty name selects the first variation.
    """
    if not variations:
        return None, None
    if not variation_name:
        variation = variations[0]
    else:
        variation = next((v for v in variations if v.name == variation_name), None)
    if variation is None:
        return None, None
    return variation, (variation.options[0] if variation.options else None)


def resolve_option(
    variations: Sequence[VariationSnapshot],
    variation_name: str,
    option_name: str
) -> Optional[OptionSnapshot]:
    variation, _ = select_variation(variations, variation_name)
    if variation is None:
        return None
    return next((o for o in variation.options if o.name == option_name), None)


def sync_custom_quantity(piece_details: PieceDetails) -> int:
    """The quantity of a custom-pieces order is always its piece total."""
    return piece_details.total


def step_mixed_quantity(current: int, direction: int, policy: QuantityPolicy = QuantityPolicy()) -> int:
    """
    Step the mixed-piece quantity up (direction > 0) or down (direction < 0).

    From the floor the first step goes to `mixed_first_step`; after that the
    quantity moves by `mixed_step` and never drops below the floor.
    """
    floor = policy.mixed_min_quantity
    current = max(current, floor)
    if direction > 0:
        if current < policy.mixed_first_step:
            return policy.mixed_first_step
        return current + policy.mixed_step
    if direction < 0:
        if current <= policy.mixed_first_step:
            return floor
        return max(current - policy.mixed_step, policy.mixed_first_step)
    return current


def is_valid_mixed_quantity(quantity: int, policy: QuantityPolicy = QuantityPolicy()) -> bool:
    if quantity == policy.mixed_min_quantity:
        return True
    if quantity < policy.mixed_first_step:
        return False
    return (quantity - policy.mixed_first_step) % policy.mixed_step == 0


def compute_price(selection, price_table: PriceSnapshot, variations: Sequence[VariationSnapshot] = ()) -> Decimal:
    """
    Compute the order total for a selection.

    Args:
        selection: ChickenSelection or GenericSelection
        price_table: Price snapshot (used for chicken selections)
        variations: Product variation snapshot (used for generic selections)

    Returns:
        Non-negative Decimal quantized to cents
    """
    if isinstance(selection, GenericSelection):
        option = resolve_option(variations, selection.variation_name, selection.option_name)
        if option is None:
            return ZERO
        return money(max(selection.quantity, 0) * to_decimal(option.price))

    if selection.chicken_type == WHOLE:
        return money(max(selection.quantity, 0) * to_decimal(price_table.whole))

    if selection.is_mixed:
        return money(max(selection.quantity, 0) * to_decimal(price_table.mixed_piece))

    if selection.is_custom:
        details = selection.piece_details
        total = sum(
            (max(getattr(details, piece), 0) * price_table.piece_price(piece) for piece in PIECE_TYPES),
            ZERO
        )
        return money(total)

    return ZERO


def compute_profit(selection, profit_table: PriceSnapshot, variations: Sequence[VariationSnapshot] = ()) -> Decimal:
    """
    Profit earned on a selection.

    Chicken selections are priced against the per-unit profit table; generic
    selections use the resolved option's profit.
    """
    if isinstance(selection, GenericSelection):
        option = resolve_option(variations, selection.variation_name, selection.option_name)
        if option is None:
            return ZERO
        return money(max(selection.quantity, 0) * to_decimal(option.profit))
    return compute_price(selection, profit_table, variations)
