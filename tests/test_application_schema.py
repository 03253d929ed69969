import itertools
import random
from datetime import date, timedelta

import pytest

from jobboard.constants import PROFILE_FIELDS, REQUIREMENT_LEVELS
from jobboard.models.job import Job
from jobboard.schemas.application import (
    build_application_schema,
    describe_application_form,
    normalize_requirements,
    required_fields,
    requirements_for_job,
    validate_application,
)
from jobboard.utils.error_handlers import ValidationError

KEYS = [key for key, *_ in PROFILE_FIELDS]
WIRE = {key: wire for key, _label, _column, wire in PROFILE_FIELDS}


def _flag_combinations():
    # Every field at every level, against each uniform background, plus a random sample.
    for key, level, background in itertools.product(KEYS, REQUIREMENT_LEVELS, REQUIREMENT_LEVELS):
        flags = {k: background for k in KEYS}
        flags[key] = level
        yield flags
    rng = random.Random(1234)
    for _ in range(100):
        yield {k: rng.choice(REQUIREMENT_LEVELS) for k in KEYS}


@pytest.mark.parametrize("flags", list(_flag_combinations()))
def test_required_keys_follow_flags(flags):
    schema = build_application_schema(flags)
    required = set(required_fields(schema))
    present = {field.alias for field in schema.model_fields.values()}
    for key, level in flags.items():
        if level == "Mandatory":
            assert WIRE[key] in required
        elif level == "Optional":
            assert WIRE[key] in present
            assert WIRE[key] not in required
        else:
            assert WIRE[key] not in present


def test_unknown_and_missing_flags_fail_closed():
    flags = normalize_requirements({"fullName": "mandatory", "email": None, "gender": 3, "domicile": "Optional"})
    assert flags["fullName"] == "Off"
    assert flags["email"] == "Off"
    assert flags["gender"] == "Off"
    assert flags["domicile"] == "Optional"
    assert flags["dateOfBirth"] == "Off"
    assert normalize_requirements(None) == {key: "Off" for key in KEYS}


def test_same_flags_give_same_schema():
    flags = {"fullName": "Mandatory", "email": "Optional"}
    assert build_application_schema(flags) is build_application_schema(dict(flags))
    # Unknown values normalise to Off, so they share the all-Off shape of their siblings.
    assert build_application_schema({"fullName": "Mandatory", "email": "Optional", "gender": "bogus"}) is (
        build_application_schema(flags)
    )


def test_requirements_read_from_job_columns():
    job = Job(req_full_name="Mandatory", req_linkedin_link="Optional", req_email=None, req_gender="???")
    flags = requirements_for_job(job)
    assert flags["fullName"] == "Mandatory"
    assert flags["linkedInLink"] == "Optional"
    assert flags["email"] == "Off"
    assert flags["gender"] == "Off"


class TestLinkedIn:
    flags = {"linkedInLink": "Mandatory"}

    @pytest.mark.parametrize(
        "url",
        [
            "https://linkedin.com/in/jane-doe",
            "https://www.linkedin.com/in/jane_doe/",
            "http://linkedin.com/in/jd123",
        ],
    )
    def test_accepts_profile_urls(self, url):
        assert validate_application(self.flags, {"linkedinUrl": url})["linkedin_url"] == url

    @pytest.mark.parametrize(
        "url",
        [
            "https://linkedin.com/company/acme",
            "https://example.com/in/jane",
            "linkedin.com/in/jane",
            "https://linkedin.com/in/",
            "",
        ],
    )
    def test_rejects_other_urls(self, url):
        with pytest.raises(ValidationError) as exc:
            validate_application(self.flags, {"linkedinUrl": url})
        assert exc.value.status_code == 400
        assert "linkedinUrl" in exc.value.details

    def test_optional_link_is_checked_only_when_given(self):
        flags = {"linkedInLink": "Optional"}
        assert validate_application(flags, {})["linkedin_url"] is None
        assert validate_application(flags, {"linkedinUrl": "  "})["linkedin_url"] is None
        with pytest.raises(ValidationError):
            validate_application(flags, {"linkedinUrl": "https://twitter.com/jane"})


def test_mandatory_fields_report_field_messages():
    flags = {"fullName": "Mandatory", "email": "Mandatory", "gender": "Mandatory"}
    with pytest.raises(ValidationError) as exc:
        validate_application(flags, {"fullName": "   ", "email": "not-an-email", "gender": "other"})
    details = exc.value.details
    assert details["fullName"] == "Full name is required"
    assert "email" in details["email"].lower()
    assert "gender" in details


def test_missing_mandatory_field_is_reported():
    with pytest.raises(ValidationError) as exc:
        validate_application({"phoneNumber": "Mandatory"}, {})
    assert "phoneNumber" in exc.value.details


def test_off_fields_are_dropped_from_submission():
    values = validate_application(
        {"fullName": "Mandatory"},
        {"fullName": "Jane Doe", "email": "ignored@example.com", "gender": "robot"},
    )
    assert values == {"full_name": "Jane Doe"}


def test_full_application_is_cleaned():
    flags = {key: "Mandatory" for key in KEYS}
    values = validate_application(
        flags,
        {
            "fullName": " Jane Doe ",
            "photoUrl": "https://cdn.example.com/jane.png",
            "gender": "female",
            "domicile": "Jakarta",
            "email": "Jane@Example.com",
            "phoneNumber": "+6281234567890",
            "linkedinUrl": "https://linkedin.com/in/jane-doe",
            "dateOfBirth": "1995-04-12",
        },
    )
    assert values["full_name"] == "Jane Doe"
    assert values["email"] == "jane@example.com"
    assert values["date_of_birth"] == date(1995, 4, 12)
    assert values["phone_number"] == "+6281234567890"


def test_future_birth_date_rejected():
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    with pytest.raises(ValidationError) as exc:
        validate_application({"dateOfBirth": "Mandatory"}, {"dateOfBirth": tomorrow})
    assert exc.value.details["dateOfBirth"] == "Date of birth cannot be in the future"


def test_form_description_matches_schema():
    flags = {"fullName": "Mandatory", "gender": "Optional", "email": "Off", "linkedInLink": "Nope"}
    form = describe_application_form(flags)
    assert [f["name"] for f in form] == ["fullName", "gender"]
    assert form[0] == {
        "name": "fullName",
        "requirement_key": "fullName",
        "label": "Full name",
        "requirement": "Mandatory",
        "required": True,
    }
    assert form[1]["required"] is False
    assert form[1]["options"] == ["male", "female"]
