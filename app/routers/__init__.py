# app/routers/__init__.py

from .masters.company_router import router as company_router
from .masters.employee_router import router as employee_router
from .masters.product_category_router import router as product_category_router
from .masters.product_router import router as product_router

from .quotations.quotation_router import router as quotation_router
from .quotations.supplier_quotation_router import router as supplier_quotation_router


__all__ = [
"company_router",
"employee_router",
"product_category_router",
"product_router",

"quotation_router",
"supplier_quotation_router",
]
