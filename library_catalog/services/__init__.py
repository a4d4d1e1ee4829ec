"""Catalogue services: credentials, search composition, validation and CRUD workflows."""
