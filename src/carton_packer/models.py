from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from carton_packer.geometry import boxes_overlap, placement_bounds


class Axis(str, Enum):
    """Canonical axes: X is length, Y is width, Z is height."""

    X = "X"
    Y = "Y"
    Z = "Z"


class Rotation(str, Enum):
    """The six axis permutations an item may be placed in."""

    LWH = "LWH"
    WLH = "WLH"
    WHL = "WHL"
    HLW = "HLW"
    HWL = "HWL"
    LHW = "LHW"


class LabelOrientation(str, Enum):
    """Which face of an item may end up facing up."""

    AUTO = "auto"
    LENGTH_WIDTH_UP = "length_width_up"
    LENGTH_HEIGHT_UP = "length_height_up"
    WIDTH_HEIGHT_UP = "width_height_up"


class PackingMode(str, Enum):
    SPACE = "space"
    WEIGHT = "weight"
    QUANTITY = "quantity"


class Vector3(BaseModel):
    """Three orthogonal extents (or a position) in one length unit."""

    model_config = ConfigDict(frozen=True)

    length: float = Field(default=0.0, ge=0, description="Extent along X")
    width: float = Field(default=0.0, ge=0, description="Extent along Y")
    height: float = Field(default=0.0, ge=0, description="Extent along Z")

    @classmethod
    def origin(cls) -> Vector3:
        return cls()

    @classmethod
    def of(cls, values) -> Vector3:
        length, width, height = values
        return cls(length=length, width=width, height=height)

    def volume(self) -> float:
        return self.length * self.width * self.height

    def get_by_axis(self, axis: Axis) -> float:
        if axis is Axis.X:
            return self.length
        if axis is Axis.Y:
            return self.width
        return self.height

    @staticmethod
    def compute_pivot(axis: Axis, pos: Vector3, dims: Vector3) -> Vector3:
        """Position next to a box at `pos` with extents `dims`, along `axis`."""
        if axis is Axis.X:
            return Vector3(length=pos.length + dims.length, width=pos.width, height=pos.height)
        if axis is Axis.Y:
            return Vector3(length=pos.length, width=pos.width + dims.width, height=pos.height)
        return Vector3(length=pos.length, width=pos.width, height=pos.height + dims.height)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.length, self.width, self.height)

    def clone(self) -> Vector3:
        return self.model_copy()


@lru_cache(maxsize=4096)
def rotated_dims(base: Vector3, rotation: Rotation) -> Vector3:
    """
    Extents of a box with base size `base` placed in `rotation`.

    Pure function of its two arguments, so the result can be memoised safely.
    """
    L, W, H = base.length, base.width, base.height
    if rotation is Rotation.LWH:
        dims = (L, W, H)
    elif rotation is Rotation.WLH:
        dims = (W, L, H)
    elif rotation is Rotation.WHL:
        dims = (W, H, L)
    elif rotation is Rotation.HLW:
        dims = (H, L, W)
    elif rotation is Rotation.HWL:
        dims = (H, W, L)
    else:
        dims = (L, H, W)
    return Vector3.of(dims)


class OrientedBox(BaseModel):
    """An item: base size, current rotation, position once placed, and weights in grams."""

    id: str = Field(description="Item label; shared by every unit of one spec")
    base_dim: Vector3 = Field(description="Un-rotated size (L, W, H)")
    rotation: Rotation = Rotation.LWH
    position: Vector3 = Field(default_factory=Vector3.origin)
    product_net_weight: float = Field(default=0.0, ge=0, description="Grams")
    product_gross_weight: float = Field(default=0.0, ge=0, description="Grams, informational")
    box_net_weight: float = Field(default=0.0, ge=0, description="Grams")
    oe_number: str = ""

    @property
    def effective_weight(self) -> float:
        return self.product_net_weight + self.box_net_weight

    def dimensions(self) -> Vector3:
        return rotated_dims(self.base_dim, self.rotation)

    def rotate(self, rotation: Rotation) -> None:
        self.rotation = rotation

    def move_to(self, position: Vector3) -> None:
        self.position = position

    def reset(self) -> None:
        """Mark the box unplaced."""
        self.position = Vector3.origin()
        self.rotation = Rotation.LWH

    def bounds(self) -> tuple[float, float, float, float, float, float]:
        return placement_bounds(self.position, self.dimensions())

    def collides(self, other: OrientedBox) -> bool:
        return boxes_overlap(self.bounds(), other.bounds())

    def clone(self) -> OrientedBox:
        return self.model_copy(deep=True)


class Bin(BaseModel):
    """A container: usable interior, placed items and weight policy (weights in kg)."""

    id: str
    usable_dim: Vector3 = Field(description="Interior size, walls already subtracted")
    items: list[OrientedBox] = Field(default_factory=list)
    label_orientation: LabelOrientation = LabelOrientation.AUTO
    packing_mode: PackingMode = PackingMode.SPACE
    max_weight: float = Field(default=0.0, ge=0, description="Maximum gross weight in kg")
    net_weight: float = Field(default=0.0, ge=0, description="Tare weight in kg")
    gross_weight: float = Field(default=0.0, ge=0, description="Informational, kg")
    order_box_number: str = ""

    @property
    def weight_limited(self) -> bool:
        return self.packing_mode is PackingMode.WEIGHT and self.max_weight > 0

    def current_weight(self) -> float:
        """Tare plus contents in grams; 0 outside weight mode."""
        if self.packing_mode is not PackingMode.WEIGHT:
            return 0.0
        return self.net_weight * 1000 + sum(item.effective_weight for item in self.items)

    def can_admit(self, candidate: OrientedBox) -> bool:
        if not self.weight_limited:
            return True
        return self.current_weight() + candidate.effective_weight <= self.max_weight * 1000

    def clone(self) -> Bin:
        return self.model_copy(deep=True)


class ItemSpec(BaseModel):
    """Demand: a template item and how many units of it to pack."""

    template: OrientedBox
    qty: int = Field(ge=0)

    def volume(self) -> float:
        return self.template.base_dim.volume()


class ContainerSpec(BaseModel):
    """Supply: a template bin and how many of it may be opened."""

    template: Bin
    qty: int = Field(ge=0)

    def volume(self) -> float:
        return self.template.usable_dim.volume()


class PackingResult(BaseModel):
    """What the engine returns: opened bins in opening order and the units that did not fit."""

    containers: list[Bin] = Field(default_factory=list)
    unpacked_items: list[OrientedBox] = Field(default_factory=list)
