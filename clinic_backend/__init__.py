"""
Clinic Backend

A FastAPI-based REST backend for clinic management: authentication,
role-scoped CRUD over locations, clinics, doctors and appointments, and
field-level encryption of sensitive doctor attributes.
"""

__version__ = "1.0.0"
