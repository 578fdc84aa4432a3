"""Pydantic models describing the Shopify Admin GraphQL product listing."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ShopifyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class InventoryItemRef(ShopifyBaseModel):
    id: str


class VariantNode(ShopifyBaseModel):
    id: str
    sku: str | None = None
    inventory_item: InventoryItemRef | None = Field(default=None, alias="inventoryItem")


class VariantEdge(ShopifyBaseModel):
    node: VariantNode


class VariantConnection(ShopifyBaseModel):
    edges: list[VariantEdge] = Field(default_factory=list)


class ProductNode(ShopifyBaseModel):
    id: str
    title: str = ""
    variants: VariantConnection = Field(default_factory=VariantConnection)


class ProductEdge(ShopifyBaseModel):
    node: ProductNode


class PageInfo(ShopifyBaseModel):
    has_next_page: bool = Field(alias="hasNextPage")
    end_cursor: str | None = Field(default=None, alias="endCursor")


class ProductConnection(ShopifyBaseModel):
    edges: list[ProductEdge] = Field(default_factory=list)
    page_info: PageInfo = Field(alias="pageInfo")


class ProductsData(ShopifyBaseModel):
    products: ProductConnection | None = None


class GraphQLError(ShopifyBaseModel):
    message: str


class ProductsQueryResponse(ShopifyBaseModel):
    data: ProductsData | None = None
    errors: list[GraphQLError] | None = None

    @property
    def products(self) -> ProductConnection | None:
        return self.data.products if self.data is not None else None
