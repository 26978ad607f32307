"""
Vercel serverless function entry point.
This file is required for Vercel to properly route requests.
"""

from app import app

# Vercel picks up the WSGI variable named 'app' defined in app.py
__all__ = ['app']
