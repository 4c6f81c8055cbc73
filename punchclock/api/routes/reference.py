from fastapi import APIRouter, HTTPException

from punchclock.api.dependencies import LookupsDep
from punchclock.models.employee import Employee
from punchclock.models.reference import Badge, Department, Shift

router = APIRouter(tags=["reference"])


@router.get("/badges/{badge_id}", response_model=Badge)
async def get_badge(badge_id: str, lookups: LookupsDep) -> Badge:
    """Get a badge by its external identifier."""
    badge = lookups.find_badge(badge_id)
    if badge is None:
        raise HTTPException(status_code=404, detail=f"Badge {badge_id} not found")
    return badge


@router.get("/departments/{department_id}", response_model=Department)
async def get_department(department_id: int, lookups: LookupsDep) -> Department:
    """Get a department and the terminal it owns."""
    department = lookups.find_department(department_id)
    if department is None:
        raise HTTPException(
            status_code=404, detail=f"Department {department_id} not found"
        )
    return department


@router.get("/shifts/{shift_id}", response_model=Shift)
async def get_shift(shift_id: int, lookups: LookupsDep) -> Shift:
    """Get a shift's schedule attributes."""
    shift = lookups.find_shift(shift_id)
    if shift is None:
        raise HTTPException(status_code=404, detail=f"Shift {shift_id} not found")
    return shift


@router.get("/employees/{employee_id}", response_model=Employee)
async def get_employee(employee_id: int, lookups: LookupsDep) -> Employee:
    """Get an employee with badge, department and shift."""
    employee = lookups.find_employee(employee_id)
    if employee is None:
        raise HTTPException(status_code=404, detail=f"Employee {employee_id} not found")
    return employee


@router.get("/employees/badge/{badge_id}", response_model=Employee)
async def get_employee_by_badge(badge_id: str, lookups: LookupsDep) -> Employee:
    """Get the employee who owns a badge."""
    badge = lookups.find_badge(badge_id)
    employee = lookups.find_employee_by_badge(badge) if badge else None
    if employee is None:
        raise HTTPException(
            status_code=404, detail=f"No employee owns badge {badge_id}"
        )
    return employee
