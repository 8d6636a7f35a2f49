"""Entity validators (one per referenced entity kind).

Why a package:
- Groups one module per owning service resource.
- Each module implements `core.interfaces.validator.EntityValidator`.
"""

from adapters.entity_validators.appointment import AppointmentValidator
from adapters.entity_validators.base import HttpEntityValidator
from adapters.entity_validators.company import CompanyValidator
from adapters.entity_validators.customer import CustomerValidator
from adapters.entity_validators.professional import ProfessionalValidator
from adapters.entity_validators.service import ServiceValidator
from adapters.entity_validators.user import UserValidator

VALIDATOR_CLASSES: tuple[type[HttpEntityValidator], ...] = (
	CustomerValidator,
	ProfessionalValidator,
	ServiceValidator,
	UserValidator,
	CompanyValidator,
	AppointmentValidator,
)

__all__ = [
	"AppointmentValidator",
	"CompanyValidator",
	"CustomerValidator",
	"HttpEntityValidator",
	"ProfessionalValidator",
	"ServiceValidator",
	"UserValidator",
	"VALIDATOR_CLASSES",
]
