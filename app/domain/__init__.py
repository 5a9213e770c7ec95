"""Domain-level policies and business rules.

Rent arithmetic, company matching, room numbering and read-side summaries
live here, independent from *where* they are applied (services,
repositories, API). Nothing in this package touches the database or reads
the clock: reference dates are always passed in.
"""
