"""HTTP API server package: FastAPI application and request/response models.

WHY: Front ends and automation tools need the conversions over HTTP.

HOW: app.py defines the FastAPI app and routes, models.py the Pydantic
schemas. Start it with the ``plato-api`` console script.
"""
