from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

from .api import ApiClient
from .errors import ApiError, ErrorCode
from .orders import default_order_date


@dataclass(frozen=True)
class LoginResult:
    token: str
    role: str | None
    full_name: str | None


def _as_list(data: Any) -> list[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("items"), list):
        return data["items"]
    return []


def _as_dict(data: Any) -> dict[str, Any]:
    return data if isinstance(data, dict) else {"raw": data}


class BakeryClient:
    """Endpoint facade over `ApiClient`."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def aclose(self) -> None:
        await self.api.aclose()

    async def __aenter__(self) -> "BakeryClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --- auth ---
    async def auth_login(self, *, email: str, password: str) -> LoginResult:
        data = await self.api.post("/auth/login", {"email": email, "password": password}, skip_auth=True)
        if isinstance(data, dict):
            token = data.get("token") or data.get("access_token")
            if isinstance(token, str) and token:
                role = data.get("role")
                full_name = data.get("full_name")
                return LoginResult(
                    token=token,
                    role=str(role) if role else None,
                    full_name=str(full_name) if full_name else None,
                )
        err = ApiError("auth login returned no token", ErrorCode.UNKNOWN_ERROR, status_code=200)
        self.api.dispatcher.on_terminal_failure(err, show_toast=True)
        raise err

    async def auth_register(
            self,
            *,
            full_name: str,
            email: str,
            password: str,
            role: str = "branch_store",
            branch_address: str | None = None,
            delivery_time: str | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "full_name": full_name,
            "email": email,
            "password": password,
            "role": role,
        }
        if branch_address is not None:
            body["branch_address"] = branch_address
        if delivery_time is not None:
            body["delivery_time"] = delivery_time
        return _as_dict(await self.api.post("/auth/register", body))

    async def auth_request_reset(self, *, email: str) -> dict[str, Any]:
        return _as_dict(await self.api.post("/auth/request-reset", {"email": email}, skip_auth=True))

    async def auth_verify_otp(self, *, email: str, otp: str) -> dict[str, Any]:
        return _as_dict(await self.api.post("/auth/verify-otp", {"email": email, "otp": otp}, skip_auth=True))

    async def auth_reset_password(self, *, email: str, otp: str, new_password: str) -> dict[str, Any]:
        body = {"email": email, "otp": otp, "newPassword": new_password}
        return _as_dict(await self.api.post("/auth/reset-password", body, skip_auth=True))

    # --- admin: food items ---
    async def admin_food_items_list(self) -> list[dict[str, Any]]:
        return _as_list(await self.api.get("/admin/food-items"))

    async def admin_food_item_create(
            self,
            *,
            food_name: str,
            description: str,
            price: float,
            is_available: bool = True,
    ) -> dict[str, Any]:
        body = {
            "food_name": food_name,
            "description": description,
            "price": float(price),
            "is_available": bool(is_available),
        }
        return _as_dict(await self.api.post("/admin/food-items", body))

    async def admin_food_item_update(self, food_id: int, **fields: Any) -> dict[str, Any]:
        body = {k: v for k, v in fields.items() if v is not None}
        if "price" in body:
            body["price"] = float(body["price"])
        return _as_dict(await self.api.put(f"/admin/food-items/{int(food_id)}", body))

    async def admin_food_item_delete(self, food_id: int) -> dict[str, Any]:
        return _as_dict(await self.api.delete(f"/admin/food-items/{int(food_id)}"))

    # --- admin: branches ---
    async def admin_branches_list(self) -> list[dict[str, Any]]:
        return _as_list(await self.api.get("/admin/branches"))

    async def admin_branch_update(
            self,
            user_id: int,
            *,
            full_name: str,
            email: str,
            branch_address: str | None = None,
            delivery_time: str | None = None,
            password: str | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "full_name": full_name,
            "email": email,
            "branch_address": branch_address,
            "delivery_time": delivery_time,
            # the backend hashes it; null keeps the current password
            "password_hash": password or None,
        }
        return _as_dict(await self.api.put(f"/admin/branches/{int(user_id)}", body))

    async def admin_branch_delete(self, user_id: int) -> dict[str, Any]:
        return _as_dict(await self.api.delete(f"/admin/branches/{int(user_id)}"))

    # --- admin: orders ---
    async def admin_orders_list(self) -> list[dict[str, Any]]:
        return _as_list(await self.api.get("/admin/orders"))

    async def admin_orders_filter(
            self,
            *,
            branch_name: str | None = None,
            order_date: str | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {}
        if branch_name:
            params["branch_name"] = branch_name
        if order_date:
            params["order_date"] = order_date
        if not params:
            raise ValueError("at least one filter is required: branch_name or order_date")
        return _as_list(await self.api.get(f"/admin/orders/filter?{urlencode(params)}"))

    # --- branch store ---
    async def branch_profile(self) -> dict[str, Any]:
        return _as_dict(await self.api.get("/branch/profile"))

    async def branch_food_items(self) -> list[dict[str, Any]]:
        return _as_list(await self.api.get("/branch/food-items"))

    async def branch_orders_list(self) -> list[dict[str, Any]]:
        return _as_list(await self.api.get("/branch/orders"))

    async def branch_order_get(self, order_id: int) -> dict[str, Any]:
        return _as_dict(await self.api.get(f"/branch/orders/{int(order_id)}"))

    async def branch_order_create(
            self,
            items: list[dict[str, Any]],
            *,
            order_date: str | None = None,
    ) -> dict[str, Any]:
        if not items:
            raise ValueError("an order needs at least one item")
        body = {
            "order_date": order_date or default_order_date(),
            "items": [{"food_id": int(i["food_id"]), "quantity": int(i["quantity"])} for i in items],
        }
        return _as_dict(await self.api.post("/branch/orders", body))
