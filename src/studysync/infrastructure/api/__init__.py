"""HTTP API: application factory, dependencies, schemas and routers."""
