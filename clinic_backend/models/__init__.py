from .location import Location
from .clinic import Clinic
from .user import User
from .doctor import Doctor
from .appointment import Appointment, AppointmentStatus

__all__ = ["Location", "Clinic", "User", "Doctor", "Appointment", "AppointmentStatus"]
