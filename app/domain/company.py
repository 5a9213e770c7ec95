"""Company identity policy.

Tenants are identified by their free-text company name, not by a row id.
All grouping and matching of rentals by company goes through ``company_key``
so the comparison rule lives in one place.

Current rule: exact match. Case-sensitive, no trimming, no normalization,
so "Acme" and "acme " are two different companies.
"""


def company_key(company_name: str) -> str:
    return company_name


def same_company(a: str, b: str) -> bool:
    return company_key(a) == company_key(b)
