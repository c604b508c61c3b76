"""Master data rows seeded by the initial migration."""

from typing import Final

from src.ems.models.enums import GenderId, RoleId, StatusId

ROLES: Final[list[dict[str, object]]] = [
    {"id": RoleId.SUPER_ADMIN.value, "name": "Super Admin"},
    {"id": RoleId.ADMIN.value, "name": "Admin"},
    {"id": RoleId.HR.value, "name": "HR"},
    {"id": RoleId.EMPLOYEE.value, "name": "Employee"},
]

STATUSES: Final[list[dict[str, object]]] = [
    {"id": StatusId.ACTIVE.value, "name": "Active"},
    {"id": StatusId.INACTIVE.value, "name": "In Active"},
    {"id": StatusId.BLOCKED.value, "name": "Blocked"},
    {"id": StatusId.DELETED.value, "name": "Deleted"},
]

GENDERS: Final[list[dict[str, object]]] = [
    {"id": GenderId.MALE.value, "name": "Male"},
    {"id": GenderId.FEMALE.value, "name": "Female"},
    {"id": GenderId.OTHER.value, "name": "Other"},
]

DEPARTMENTS: Final[list[dict[str, object]]] = [
    {"id": i, "name": name}
    for i, name in enumerate(
        [
            "Engineering",
            "Human Resources",
            "Finance",
            "Sales",
            "Marketing",
            "Operations",
            "Customer Support",
            "Legal",
            "Product",
            "Design",
            "Quality Assurance",
            "Administration",
        ],
        start=1,
    )
]

DESIGNATIONS: Final[list[dict[str, object]]] = [
    {"id": i, "name": name}
    for i, name in enumerate(
        [
            "Software Engineer",
            "Senior Software Engineer",
            "Team Lead",
            "Engineering Manager",
            "HR Executive",
            "HR Manager",
            "Accountant",
            "Finance Manager",
            "Sales Executive",
            "Marketing Specialist",
            "Product Manager",
            "UI/UX Designer",
            "QA Engineer",
            "Office Administrator",
            "Intern",
        ],
        start=1,
    )
]
