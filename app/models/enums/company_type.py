# app/models/enums/company_type.py
import enum


class CompanyType(int, enum.Enum):
    two_way = 1
    supplier = 2
    client = 3
