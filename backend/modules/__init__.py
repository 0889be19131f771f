"""
Feature modules of the Storefront backend.

- auth: accounts, credentials and bearer tokens
- products: the cake shop catalog and its images

A module exposes Protocols in interfaces.py and keeps its Supabase access
in repository.py; routes depend on the interfaces only.
"""
