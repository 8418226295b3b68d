"""
Settings Router
Dashboard-editable app settings
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from storefront.database import get_database
from storefront.middleware.auth_middleware import verify_api_key
from storefront.services.settings_service import AppSettingsService, WA_ORDER_TEMPLATE_KEY
from storefront.utils.whatsapp import DEFAULT_ORDER_TEMPLATE

router = APIRouter(prefix="/settings", tags=["Settings"])


class OrderTemplateUpdate(BaseModel):
    template: str = Field(min_length=1, max_length=1000)


@router.get("/wa-template")
async def get_wa_template(
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """WhatsApp order message template ({{name}}, {{type}}, {{offer}}, {{price}} ...)"""

    template = await AppSettingsService(db).get_order_template()

    return {
        "key": WA_ORDER_TEMPLATE_KEY,
        "template": template,
        "is_default": template == DEFAULT_ORDER_TEMPLATE
    }


@router.put("/wa-template")
async def update_wa_template(
    request: OrderTemplateUpdate,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    await AppSettingsService(db).set_value(WA_ORDER_TEMPLATE_KEY, request.template)

    return {"success": True, "key": WA_ORDER_TEMPLATE_KEY, "template": request.template}
