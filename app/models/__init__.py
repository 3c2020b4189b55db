# Masters
from app.models.masters.company_models import Company
from app.models.masters.employee_models import Employee
from app.models.masters.product_category_models import ProductCategory
from app.models.masters.product_models import Product

# Quotations
from app.models.quotations.quotation_request_models import QuotationRequest, QuotationRequestLineItem
from app.models.quotations.supplier_quotation_models import SupplierQuotation
