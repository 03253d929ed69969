from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator

from ..constants import JOB_TYPES, REQUIREMENT_COLUMNS

RequirementLevel = Literal["Mandatory", "Optional", "Off"]
JobStatus = Literal["draft", "active", "inactive"]


class JobSalary(BaseModel):
    minimum: int = Field(ge=0)
    maximum: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_range(self) -> "JobSalary":
        if self.maximum < self.minimum:
            raise ValueError("Maximum salary must be greater than or equal to minimum salary")
        return self


class MinimumProfileInformation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: RequirementLevel = Field(alias="fullName")
    photo_profile: RequirementLevel = Field(alias="photoProfile")
    gender: RequirementLevel
    domicile: RequirementLevel
    email: RequirementLevel
    phone_number: RequirementLevel = Field(alias="phoneNumber")
    linkedin_link: RequirementLevel = Field(alias="linkedInLink")
    date_of_birth: RequirementLevel = Field(alias="dateOfBirth")

    def to_columns(self) -> dict:
        by_key = self.model_dump(by_alias=True)
        return {column: by_key[key] for key, column in REQUIREMENT_COLUMNS.items()}


def _known_job_type(value: str) -> str:
    if value not in JOB_TYPES:
        raise ValueError(f"Job type must be one of: {', '.join(JOB_TYPES)}")
    return value


JobType = Annotated[str, AfterValidator(_known_job_type)]


class JobOpening(BaseModel):
    """Body of ``POST /api/jobs``."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    job_name: str = Field(alias="jobName", min_length=1, max_length=150)
    job_type: JobType = Field(alias="jobType", min_length=1, max_length=30)
    job_description: str = Field(alias="jobDescription", min_length=1)
    department: str | None = Field(default=None, max_length=120)
    company_name: str | None = Field(default=None, alias="companyName", max_length=255)
    number_of_candidates_needed: int = Field(alias="numberOfCandidatesNeeded", gt=0)
    job_salary: JobSalary = Field(alias="jobSalary")
    status: JobStatus = "draft"
    minimum_profile_information: MinimumProfileInformation = Field(alias="minimumProfileInformation")

    def to_columns(self) -> dict:
        return _opening_columns(self, self.model_fields_set | {"status"})


class JobOpeningUpdate(BaseModel):
    """Body of ``PATCH /api/jobs/{id}``; only the supplied fields change."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    job_name: str | None = Field(default=None, alias="jobName", min_length=1, max_length=150)
    job_type: JobType | None = Field(default=None, alias="jobType", min_length=1, max_length=30)
    job_description: str | None = Field(default=None, alias="jobDescription", min_length=1)
    department: str | None = Field(default=None, max_length=120)
    company_name: str | None = Field(default=None, alias="companyName", max_length=255)
    number_of_candidates_needed: int | None = Field(default=None, alias="numberOfCandidatesNeeded", gt=0)
    job_salary: JobSalary | None = Field(default=None, alias="jobSalary")
    status: JobStatus | None = None
    minimum_profile_information: MinimumProfileInformation | None = Field(
        default=None, alias="minimumProfileInformation"
    )

    def to_columns(self) -> dict:
        return _opening_columns(self, self.model_fields_set)


# Columns that may be cleared by sending null; everything else ignores null.
_NULLABLE = {"department", "company_name"}


def _opening_columns(opening: JobOpening | JobOpeningUpdate, fields: set[str]) -> dict:
    columns: dict = {}
    for name in fields:
        value = getattr(opening, name)
        if value is None and name not in _NULLABLE:
            continue
        if name == "job_salary":
            columns["salary_min"] = value.minimum
            columns["salary_max"] = value.maximum
        elif name == "minimum_profile_information":
            columns.update(value.to_columns())
        else:
            columns[name] = value
    return columns
