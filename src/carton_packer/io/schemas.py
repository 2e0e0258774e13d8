"""Wire schemas for packing requests and results."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from carton_packer.metrics import bin_utilization
from carton_packer.models import (
    Bin,
    ContainerSpec,
    ItemSpec,
    LabelOrientation,
    OrientedBox,
    PackingMode,
    PackingResult,
    Rotation,
    Vector3,
)

Extent = Annotated[float, Field(ge=0)]
Dim = tuple[Extent, Extent, Extent]


class WireModel(BaseModel):
    """camelCase on the wire, snake_case accepted too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ItemInput(WireModel):
    """One line of demand."""

    id: str = Field(description="Item label")
    qty: int = Field(ge=0, description="Units to pack")
    dim: Dim = Field(description="[length, width, height]")
    thickness: float = Field(default=0.0, ge=0, description="Padding added above and below")
    oe_number: str = ""
    product_net_weight: float = Field(default=0.0, ge=0, description="Grams")
    product_gross_weight: float = Field(default=0.0, ge=0, description="Grams")
    box_net_weight: float = Field(default=0.0, ge=0, description="Grams")

    def padded_dim(self) -> Vector3:
        # Padding only thickens the item vertically
        length, width, height = self.dim
        return Vector3(length=length, width=width, height=height + self.thickness * 2)

    def to_spec(self) -> ItemSpec:
        template = OrientedBox(
            id=self.id,
            base_dim=self.padded_dim(),
            product_net_weight=self.product_net_weight,
            product_gross_weight=self.product_gross_weight,
            box_net_weight=self.box_net_weight,
            oe_number=self.oe_number,
        )
        return ItemSpec(template=template, qty=self.qty)


class ContainerInput(WireModel):
    """One line of supply."""

    id: str = Field(description="Container label")
    qty: int = Field(ge=0, description="Containers available")
    dim: Dim = Field(description="Outer [length, width, height]")
    thickness: float = Field(default=0.0, ge=0, description="Wall thickness")
    order_box_number: str = ""
    label_orientation: LabelOrientation = LabelOrientation.AUTO
    packing_method: PackingMode = PackingMode.SPACE
    max_weight: float = Field(default=0.0, ge=0, description="Kilograms")
    container_net_weight: float = Field(default=0.0, ge=0, description="Kilograms")
    container_gross_weight: float = Field(default=0.0, ge=0, description="Kilograms")

    @model_validator(mode="after")
    def _walls_leave_room(self) -> ContainerInput:
        if min(self.dim) - self.thickness * 2 < 0:
            raise ValueError(f"wall thickness {self.thickness} exceeds container {self.id!r}")
        return self

    def usable_dim(self) -> Vector3:
        walls = self.thickness * 2
        length, width, height = self.dim
        return Vector3(length=length - walls, width=width - walls, height=height - walls)

    def to_spec(self) -> ContainerSpec:
        template = Bin(
            id=self.id,
            usable_dim=self.usable_dim(),
            label_orientation=self.label_orientation,
            packing_mode=self.packing_method,
            max_weight=self.max_weight,
            net_weight=self.container_net_weight,
            gross_weight=self.container_gross_weight,
            order_box_number=self.order_box_number,
        )
        return ContainerSpec(template=template, qty=self.qty)


class PackRequest(WireModel):
    items: list[ItemInput]
    containers: list[ContainerInput]

    def to_engine_specs(self) -> tuple[list[ItemSpec], list[ContainerSpec]]:
        return [i.to_spec() for i in self.items], [c.to_spec() for c in self.containers]


class PlacedItem(WireModel):
    """A packed (or unpacked) unit as reported to callers."""

    id: str
    dim: Vector3 = Field(description="Base size")
    pos: Vector3
    rot: Rotation
    dimensions: Vector3 = Field(description="Extents under `rot`")
    oe_number: str = ""
    product_net_weight: float = 0.0
    product_gross_weight: float = 0.0
    box_net_weight: float = 0.0

    @classmethod
    def from_box(cls, box: OrientedBox) -> PlacedItem:
        return cls(
            id=box.id,
            dim=box.base_dim,
            pos=box.position,
            rot=box.rotation,
            dimensions=box.dimensions(),
            oe_number=box.oe_number,
            product_net_weight=box.product_net_weight,
            product_gross_weight=box.product_gross_weight,
            box_net_weight=box.box_net_weight,
        )


class PackedContainer(WireModel):
    id: str
    dim: Vector3 = Field(description="Usable interior")
    items: list[PlacedItem]
    label_orientation: LabelOrientation
    packing_method: PackingMode
    max_weight: float
    container_net_weight: float
    container_gross_weight: float
    order_box_number: str
    weight: float = Field(description="Grams; 0 outside weight mode")
    utilization: float = Field(ge=0, description="Packed volume over usable volume")

    @classmethod
    def from_bin(cls, bin: Bin) -> PackedContainer:
        return cls(
            id=bin.id,
            dim=bin.usable_dim,
            items=[PlacedItem.from_box(item) for item in bin.items],
            label_orientation=bin.label_orientation,
            packing_method=bin.packing_mode,
            max_weight=bin.max_weight,
            container_net_weight=bin.net_weight,
            container_gross_weight=bin.gross_weight,
            order_box_number=bin.order_box_number,
            weight=bin.current_weight(),
            utilization=bin_utilization(bin),
        )


class PackResult(WireModel):
    containers: list[PackedContainer] = Field(default_factory=list)
    unpacked_items: list[PlacedItem] = Field(default_factory=list, alias="unpacked_items")

    @classmethod
    def from_result(cls, result: PackingResult) -> PackResult:
        return cls(
            containers=[PackedContainer.from_bin(b) for b in result.containers],
            unpacked_items=[PlacedItem.from_box(i) for i in result.unpacked_items],
        )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
