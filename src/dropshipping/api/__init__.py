from dropshipping.api.routes import internal_router, orders_router

__all__ = ["orders_router", "internal_router"]
