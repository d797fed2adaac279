"""Supplier port — abstract interface for dropshipping supplier integrations.

All supplier adapters must implement this interface. The pipeline programs
against the port; adapters are picked per supplier by the SupplierRegistry.
Adapters signal failure by raising a SupplierError.
"""

from abc import ABC, abstractmethod

from dropshipping.supplier.normalized import NormalizedOrder


class SupplierPort(ABC):
    """Abstract interface for supplier adapters."""

    @abstractmethod
    def create_order(self, order: NormalizedOrder) -> dict:
        """Submit an order to the supplier.

        Returns:
            dict with keys: supplier_order_id, status
        """
        ...

    @abstractmethod
    def get_order_status(self, supplier_order_id: str) -> dict:
        """Get the supplier's current view of an order.

        Returns:
            dict with keys: status, tracking_number (optional), tracking_url (optional)
        """
        ...

    @abstractmethod
    def get_tracking(self, supplier_order_id: str) -> dict:
        """Get shipment tracking for a supplier order.

        Returns:
            dict with keys: status, tracking_number (optional), tracking_url (optional)
        """
        ...

    def is_configured(self) -> bool:
        """Whether the adapter has everything it needs to talk to the supplier."""
        return True
