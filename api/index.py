"""
Serverless function entry point for the star-history FastAPI app
"""
from mangum import Mangum

from star_history.main import app

# Lambda-style events are translated to ASGI; startup/shutdown events are not sent
mangum_handler = Mangum(app, lifespan="off")


def handler(event, context=None):
    """Serverless function handler"""
    return mangum_handler(event, context)
