from src.ems.services.auth_service import AuthService
from src.ems.services.provisioning_service import WorkspaceProvisioningService
from src.ems.services.reference_service import ReferenceDataService

__all__ = ["AuthService", "ReferenceDataService", "WorkspaceProvisioningService"]
