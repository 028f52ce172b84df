"""Generic CRUD engine shared by API resources."""
