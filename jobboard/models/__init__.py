from .application import JobApplication
from .job import Job
from .profile import Profile

__all__ = ["Job", "JobApplication", "Profile"]
