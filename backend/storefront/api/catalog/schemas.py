"""API schemas for catalog endpoints."""

from pydantic import BaseModel

from storefront.models.catalog import Brand, Color, ProductType, Size


class ProductTypeResponse(BaseModel):
    id: str
    name: str

    @classmethod
    def from_model(cls, product_type: ProductType) -> "ProductTypeResponse":
        return cls(id=product_type.id, name=product_type.name)


class BrandResponse(BaseModel):
    id: str
    name: str

    @classmethod
    def from_model(cls, brand: Brand) -> "BrandResponse":
        return cls(id=brand.id, name=brand.name)


class ColorResponse(BaseModel):
    id: str
    value: str

    @classmethod
    def from_model(cls, color: Color) -> "ColorResponse":
        return cls(id=color.id, value=color.value)


class SizeResponse(BaseModel):
    id: str
    value: str

    @classmethod
    def from_model(cls, size: Size) -> "SizeResponse":
        return cls(id=size.id, value=size.value)
