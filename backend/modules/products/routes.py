"""
Product API endpoints.

Reads are public; writes sit behind the auth gate. Create and update take
multipart forms: text fields plus up to five files under ``images``. On
update, a text ``images`` field (JSON list) names the existing images to keep.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from api.dependencies import get_product_service
from api.middleware.auth import RequireAuth
from api.models.errors import ErrorEnvelope

from .exceptions import InvalidImageError
from .interfaces import IProductService
from .models import ProductForm, ImageUpload, ProductResponse, ProductListResponse

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorEnvelope, "description": "Invalid input"},
    401: {"model": ErrorEnvelope, "description": "Not authenticated"},
    404: {"model": ErrorEnvelope, "description": "Product not found"},
}

FORM_FIELDS = ("name", "description", "price", "category", "ingredients", "allergens")


async def read_product_form(
    request: Request,
    max_image_bytes: int,
) -> tuple[ProductForm, list[ImageUpload]]:
    """
    Split a multipart request into text fields and image uploads.

    No more than ``max_image_bytes + 1`` bytes of a file are held in memory;
    anything bigger is rejected before it is read in full.
    """
    form = await request.form()
    fields: dict[str, str] = {}
    uploads: list[ImageUpload] = []

    for name in FORM_FIELDS:
        value = form.get(name)
        if isinstance(value, str):
            fields[name] = value
    if isinstance(form.get("isAvailable"), str):
        fields["is_available"] = form["isAvailable"]

    for value in form.getlist("images"):
        if isinstance(value, UploadFile):
            filename = value.filename or "upload"
            if value.size is not None and value.size > max_image_bytes:
                raise InvalidImageError.too_large(max_image_bytes, filename)
            data = await value.read(max_image_bytes + 1)
            if len(data) > max_image_bytes:
                raise InvalidImageError.too_large(max_image_bytes, filename)
            uploads.append(
                ImageUpload(
                    filename=filename,
                    content_type=value.content_type or "application/octet-stream",
                    data=data,
                )
            )
        elif isinstance(value, str):
            fields["images"] = value

    return ProductForm(**fields), uploads


@router.get("", response_model=ProductListResponse)
async def list_products(
    service: IProductService = Depends(get_product_service),
) -> ProductListResponse:
    """
    List all products.
    """
    products = await service.list_products()
    return ProductListResponse(
        count=len(products),
        data=[product.to_public() for product in products],
    )


@router.get("/{product_id}", response_model=ProductResponse, responses=ERROR_RESPONSES)
async def get_product(
    product_id: str,
    service: IProductService = Depends(get_product_service),
) -> ProductResponse:
    """
    Get a single product.
    """
    product = await service.get_product(product_id)
    return ProductResponse(data=product.to_public())


@router.post(
    "",
    response_model=ProductResponse,
    status_code=201,
    responses=ERROR_RESPONSES,
    dependencies=[RequireAuth],
)
async def create_product(
    request: Request,
    service: IProductService = Depends(get_product_service),
) -> ProductResponse:
    """
    Create a product with optional images.

    Requires authentication.
    """
    form, uploads = await read_product_form(request, request.app.state.settings.max_image_bytes)
    product = await service.create_product(form, uploads)
    return ProductResponse(data=product.to_public())


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    dependencies=[RequireAuth],
)
async def update_product(
    product_id: str,
    request: Request,
    service: IProductService = Depends(get_product_service),
) -> ProductResponse:
    """
    Update a product.

    Requires authentication.
    """
    form, uploads = await read_product_form(request, request.app.state.settings.max_image_bytes)
    product = await service.update_product(product_id, form, uploads)
    return ProductResponse(data=product.to_public())


@router.delete("/{product_id}", responses=ERROR_RESPONSES, dependencies=[RequireAuth])
async def delete_product(
    product_id: str,
    service: IProductService = Depends(get_product_service),
) -> JSONResponse:
    """
    Delete a product.

    Requires authentication.
    """
    await service.delete_product(product_id)
    return JSONResponse(status_code=200, content={"success": True, "data": {}})
