# services/employee_service.py
from typing import List, Tuple

from api_client import ApiClient, ApiError
from domain.models import Employee


def fetch_employees(client: ApiClient) -> Tuple[bool, str, List[Employee]]:
    """
    Employees of the admin's own store.
    Returns (ok, message, employees)
    """
    try:
        body = client.get("/users")
    except ApiError as e:
        return False, e.describe("Failed to load employees"), []
    return True, "Fetched", [Employee.from_dict(u) for u in body.get("data") or []]


def create_employee(client: ApiClient, name: str, email: str, password: str) -> Tuple[bool, str]:
    try:
        client.post("/users", json={"name": name.strip(), "email": email.strip(), "password": password})
    except ApiError as e:
        return False, e.describe("Failed to create employee")
    return True, "Employee created successfully"


def toggle_employee_status(client: ApiClient, employee_id: str, currently_active: bool) -> Tuple[bool, str]:
    try:
        client.patch(f"/users/{employee_id}/toggle-status")
    except ApiError as e:
        return False, e.describe("Failed to update employee status")
    return True, f"Employee {'deactivated' if currently_active else 'activated'} successfully"


def delete_employee(client: ApiClient, employee_id: str) -> Tuple[bool, str]:
    try:
        client.delete(f"/users/{employee_id}")
    except ApiError as e:
        return False, e.describe("Failed to delete employee")
    return True, "Employee deleted successfully"
