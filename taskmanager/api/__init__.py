# This file marks the API package for the TaskManager HTTP service.
# It groups configuration, data access, routers, schemas, and services.
