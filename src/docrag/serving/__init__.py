"""
Serving — FastAPI application for uploading and querying documents.

The HTTP layer is a thin shell over :class:`docrag.service.RagService`.
"""
