"""Azure Functions entry point — GeoJSON conversion endpoint.

This module registers the HTTP function using the Python v2 programming
model.

All business logic lives in the geo_convert package. This file is purely
the wiring layer between the Azure Functions binding and application code.
"""

from __future__ import annotations

import logging

import azure.functions as func

from geo_convert.core.config import ConverterConfig
from geo_convert.core.http import handle_http_request

config = ConverterConfig.from_env()

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

logger = logging.getLogger("geo_convert.function_app")
logging.getLogger("geo_convert").setLevel(config.log_level)


# ---------------------------------------------------------------------------
# HTTP: Convert uploaded file to GeoJSON
# ---------------------------------------------------------------------------


@app.function_name("convertToGeoJSON")
@app.route(route="convertToGeoJSON", methods=["POST", "OPTIONS"])
def convert_to_geojson(req: func.HttpRequest) -> func.HttpResponse:
    """Convert an uploaded geographic file to a GeoJSON FeatureCollection.

    Request body::

        {"fileName": "sites.kml", "fileContent": "data:...;base64,<payload>",
         "fileType": "application/vnd.google-earth.kml+xml"}

    Returns the success envelope ``{success, geoJson, message}`` or the
    failure envelope ``{success, error}``; ``OPTIONS`` answers the CORS
    preflight with an empty body.
    """
    reply = handle_http_request(req.method, req.get_body(), config=config)

    logger.info(
        "convertToGeoJSON finished | method=%s | status=%d",
        req.method,
        reply.status_code,
    )

    return func.HttpResponse(
        body=reply.body_bytes(),
        status_code=reply.status_code,
        headers=reply.headers,
    )
