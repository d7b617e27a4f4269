"""
rackledger_client.py

A small HTTP client for the Rack Ledger API. Every screen or script that
needs warehouse data goes through this one class instead of keeping its own
copy of locations, items or balances.

Environment variables:
- RACKLEDGER_API_URL: e.g. "http://localhost:8787/api"

Optional:
- RACKLEDGER_API_TIMEOUT: request timeout in seconds (default 30)

Dependencies:
- requests
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests


class ApiError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None, error: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.error = error


@dataclass
class RackLedgerClient:
    base_url: str
    timeout: float = 30

    @classmethod
    def from_env(cls) -> "RackLedgerClient":
        base_url = os.getenv("RACKLEDGER_API_URL", "http://localhost:8787/api")
        timeout = float(os.getenv("RACKLEDGER_API_TIMEOUT", "30"))
        return cls(base_url=base_url, timeout=timeout)

    def _request(self, method: str, path: str, *, json: Any = None, params: Dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        resp = requests.request(
            method,
            url,
            json=json,
            params=params or None,
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )

        if resp.status_code >= 400:
            error = None
            try:
                error = resp.json().get("error")
            except ValueError:
                pass
            raise ApiError(
                f"{method} {path} failed ({resp.status_code}): {error or resp.text}",
                status_code=resp.status_code,
                error=error,
            )

        if resp.status_code == 204:
            return None
        return resp.json()

    def health(self) -> bool:
        return bool(self._request("GET", "/health").get("ok"))

    # ----------------------------
    # Masters
    # ----------------------------

    def list_warehouses(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/warehouses")

    def create_warehouse(self, *, code: str, name: str, address: Optional[str] = None) -> Dict[str, Any]:
        return self._request("POST", "/warehouses", json={"code": code, "name": name, "address": address})

    def list_locations(self, *, warehouse_id: Optional[str] = None) -> List[Dict[str, Any]]:
        return self._request("GET", "/locations", params={"warehouseId": warehouse_id})

    def create_location(self, *, code: str, warehouse_id: str, description: Optional[str] = None) -> Dict[str, Any]:
        payload = {"code": code, "warehouseId": warehouse_id, "description": description}
        return self._request("POST", "/locations", json=payload)

    def list_items(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/items")

    def create_item(self, *, sku: str, name: str, barcode: Optional[str] = None) -> Dict[str, Any]:
        return self._request("POST", "/items", json={"sku": sku, "name": name, "barcode": barcode})

    def search(self, q: str) -> List[Dict[str, Any]]:
        """Calls: GET /search. At most 20 items come back."""
        return self._request("GET", "/search", params={"q": q})

    # ----------------------------
    # Ledger
    # ----------------------------

    def list_inventory(
        self,
        *,
        item_id: Optional[str] = None,
        location_id: Optional[str] = None,
        warehouse_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params = {"itemId": item_id, "locationId": location_id, "warehouseId": warehouse_id}
        return self._request("GET", "/inventory", params=params)

    def place(self, *, item_id: str, location_id: str, qty: int) -> Dict[str, Any]:
        return self._request("POST", "/placement", json={"itemId": item_id, "locationId": location_id, "qty": qty})

    def retrieve(self, *, item_id: str, location_id: str, qty: int) -> Dict[str, Any]:
        """
        Calls: POST /retrieval
        Raises ApiError with error == "Insufficient quantity" when stock is short.
        """
        return self._request("POST", "/retrieval", json={"itemId": item_id, "locationId": location_id, "qty": qty})

    def transfer(self, *, item_id: str, from_location_id: str, to_location_id: str, qty: int) -> Dict[str, Any]:
        """
        Calls: POST /transfer
        This is the atomic transfer endpoint (deduct from source, add to destination).
        """
        payload = {
            "itemId": item_id,
            "fromLocationId": from_location_id,
            "toLocationId": to_location_id,
            "qty": qty,
        }
        return self._request("POST", "/transfer", json=payload)

    def list_movements(
        self,
        *,
        item_id: Optional[str] = None,
        location_id: Optional[str] = None,
        movement_type: Optional[str] = None,
        limit: int = 200,
    ) -> List[Dict[str, Any]]:
        params = {"itemId": item_id, "locationId": location_id, "type": movement_type, "limit": limit}
        return self._request("GET", "/movements", params=params)

    # ----------------------------
    # Reports
    # ----------------------------

    def dashboard(self) -> Dict[str, Any]:
        return self._request("GET", "/dashboard")

    def export(self) -> Dict[str, Any]:
        return self._request("GET", "/export")
