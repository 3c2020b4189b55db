# app/constants/error_codes.py
import enum


class ErrorCode(str, enum.Enum):
    # ---------------- GENERIC ----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
    ENTITY_IN_USE = "ENTITY_IN_USE"

    # ---------------- COMPANIES / EMPLOYEES ----------------
    COMPANY_NOT_FOUND = "COMPANY_NOT_FOUND"
    EMPLOYEE_NOT_FOUND = "EMPLOYEE_NOT_FOUND"

    # ---------------- PRODUCTS ----------------
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    PRODUCT_NAME_EXISTS = "PRODUCT_NAME_EXISTS"
    PRODUCT_CATEGORY_NOT_FOUND = "PRODUCT_CATEGORY_NOT_FOUND"

    # ---------------- QUOTATIONS ----------------
    QUOTATION_NOT_FOUND = "QUOTATION_NOT_FOUND"
    SUPPLIER_QUOTATION_NOT_FOUND = "SUPPLIER_QUOTATION_NOT_FOUND"
