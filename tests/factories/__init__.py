from tests.factories.user import (
    DEFAULT_TEST_PASSWORD,
    EmployeeInformationFactory,
    UserFactory,
    WorkspaceFactory,
)

__all__ = [
    "DEFAULT_TEST_PASSWORD",
    "EmployeeInformationFactory",
    "UserFactory",
    "WorkspaceFactory",
]
