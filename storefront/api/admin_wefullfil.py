"""
WeFulFil Admin API Endpoints
Search the WeFulFil catalog and import products into the storefront

All endpoints require the admin role.
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from typing import List, Literal, Optional

from storefront.connectors.wefullfil_connector import WeFulFilAPIError, WeFulFilConnector
from storefront.core.auth import require_admin
from storefront.domain.user import UserProfile
from storefront.domain.wefullfil import WeFulFilProduct, WeFulFilProductFilter
from storefront.services.pagination import page_window
from storefront.services.wefullfil_import_service import WeFulFilImportService, to_admin_product

router = APIRouter()


class ImportRequest(BaseModel):
    products: List[WeFulFilProduct]


class ImportAllRequest(BaseModel):
    search: Optional[str] = None


def _api_error(e: WeFulFilAPIError) -> HTTPException:
    status_code = e.status_code if 400 <= e.status_code < 600 else 502
    return HTTPException(status_code=status_code, detail=str(e))


@router.get("/test-connection")
async def test_connection(user: UserProfile = Depends(require_admin)):
    try:
        return await WeFulFilConnector().test_connection()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/products")
async def search_products(
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
    sort_by: Literal["title", "price", "created_at", "updated_at"] = Query("title"),
    sort_order: Literal["asc", "desc"] = Query("asc"),
    user: UserProfile = Depends(require_admin)
):
    """Search the WeFulFil catalog"""
    try:
        filters = WeFulFilProductFilter(
            search=search, page=page, per_page=per_page, sort_by=sort_by, sort_order=sort_order
        )
        response = await WeFulFilConnector().get_products(filters)
        pagination = response.meta.pagination

        return {
            "status": "success",
            "data": [product.model_dump(mode="json") for product in response.data],
            "meta": response.meta.model_dump(),
            "window": page_window(pagination.current_page, pagination.total_pages)
        }

    except WeFulFilAPIError as e:
        raise _api_error(e)
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching WeFulFil products: {str(e)}")


@router.get("/products/{product_id}")
async def get_product(product_id: str, user: UserProfile = Depends(require_admin)):
    """A WeFulFil product with its admin products table view"""
    try:
        product = await WeFulFilConnector().get_product(product_id)

        return {
            "status": "success",
            "data": product.model_dump(mode="json"),
            "admin_product": to_admin_product(product).model_dump(mode="json")
        }

    except WeFulFilAPIError as e:
        raise _api_error(e)
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching WeFulFil product: {str(e)}")


@router.post("/import")
async def import_selected(request: ImportRequest, user: UserProfile = Depends(require_admin)):
    """Import the selected products (out-of-stock ones are skipped)"""
    try:
        result = WeFulFilImportService().import_selected(request.products, user_id=user.id)
        return {
            "status": "success",
            "message": f"Imported {result.success} of {result.total} products",
            "data": result.model_dump()
        }

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error importing products: {str(e)}")


@router.post("/import-all")
async def import_all(request: ImportAllRequest, user: UserProfile = Depends(require_admin)):
    """Import every product the WeFulFil catalog returns for the search"""
    try:
        result = await WeFulFilImportService().import_all(
            WeFulFilConnector(), search=request.search, user_id=user.id
        )
        return {
            "status": "success",
            "message": f"Imported {result.success} of {result.total} products",
            "data": result.model_dump()
        }

    except WeFulFilAPIError as e:
        raise _api_error(e)
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error importing products: {str(e)}")


@router.get("/imported")
async def get_imported_products(
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
    user: UserProfile = Depends(require_admin)
):
    """Products previously imported from WeFulFil"""
    try:
        result = WeFulFilImportService().list_imported_products(page, per_page)
        return {"status": "success", **result.model_dump(mode="json")}

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching imported products: {str(e)}")
