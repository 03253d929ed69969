"""Shared enumerations and field metadata."""

ROLES = ("recruiter", "job_seeker")
JOB_STATUSES = ("draft", "active", "inactive")
GENDERS = ("male", "female")

JOB_TYPES = (
    "Full-time",
    "Contract",
    "Part-time",
    "Internship",
    "Freelance",
)

REQUIREMENT_LEVELS = ("Mandatory", "Optional", "Off")

# Requirement key -> (label, application column, wire name on the application form)
PROFILE_FIELDS = (
    ("fullName", "Full name", "full_name", "fullName"),
    ("photoProfile", "Photo Profile", "photo_url", "photoUrl"),
    ("gender", "Gender", "gender", "gender"),
    ("domicile", "Domicile", "domicile", "domicile"),
    ("email", "Email", "email", "email"),
    ("phoneNumber", "Phone number", "phone_number", "phoneNumber"),
    ("linkedInLink", "LinkedIn link", "linkedin_url", "linkedinUrl"),
    ("dateOfBirth", "Date of birth", "date_of_birth", "dateOfBirth"),
)

# Requirement key -> column on the jobs table
REQUIREMENT_COLUMNS = {
    "fullName": "req_full_name",
    "photoProfile": "req_photo_profile",
    "gender": "req_gender",
    "domicile": "req_domicile",
    "email": "req_email",
    "phoneNumber": "req_phone_number",
    "linkedInLink": "req_linkedin_link",
    "dateOfBirth": "req_date_of_birth",
}

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
LINKEDIN_PATTERN = r"^https?://(www\.)?linkedin\.com/in/[\w-]+/?$"
PHONE_PATTERN = r"^\+?[0-9][0-9\s-]{5,19}$"

# Applied-date windows offered by the candidate table filter, in days.
DATE_FILTER_WINDOWS = {
    "24h": 1,
    "1w": 7,
    "1m": 30,
}

APPLICATION_SORT_COLUMNS = (
    "applied_at",
    "full_name",
    "email",
    "phone_number",
    "gender",
    "domicile",
    "date_of_birth",
)
