"""
Vercel Serverless Function wrapper for the scoring API
"""
from mangum import Mangum

from elitebuilders.main import app

# Mangum converts Lambda-style events to ASGI
mangum_handler = Mangum(app, lifespan="off")


def handler(event, context=None):
    """Vercel serverless function handler"""
    return mangum_handler(event, context)
