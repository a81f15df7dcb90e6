import pytest

from app.schemas.students import StudentForm
from app.services.student_validator import validate_create, validate_update


def _form(valid_form, **overrides) -> StudentForm:
    return StudentForm.from_mapping({**valid_form, **overrides})


def test_create_valid_form(db_session, valid_form):
    submission = validate_create(db_session, _form(valid_form))

    assert submission.is_valid
    assert submission.errors == []


@pytest.mark.parametrize("nisn", ["", "1234567", "123456789", "1"])
def test_create_rejects_nisn_length(db_session, valid_form, nisn):
    submission = validate_create(db_session, _form(valid_form, nisn=nisn))

    assert submission.messages_for("nisn") == ["NISN wajib 8 digit angka!"]


def test_create_nisn_length_only_no_numeric_check(db_session, valid_form):
    """Na criação nisn/nik não passam por checagem numérica."""
    submission = validate_create(
        db_session, _form(valid_form, nisn="ABCDEFGH", nik="ABCDEFGHIJKLMNOP")
    )

    assert submission.is_valid


def test_create_rejects_duplicates(db_session, valid_form, make_student):
    make_student()

    submission = validate_create(db_session, _form(valid_form))

    assert submission.messages_for("nisn") == ["NISN sudah terdaftar!"]
    assert submission.messages_for("nik") == ["NIK sudah terdaftar!"]


def test_create_collects_all_errors(db_session, valid_form):
    submission = validate_create(
        db_session, _form(valid_form, nisn="1", nik="2", nokk="3", nama="")
    )

    assert submission.messages == [
        "NISN wajib 8 digit angka!",
        "NIK wajib 16 digit angka!",
        "No. KK harus 16 digit angka!",
        "Nama wajib diisi!",
    ]


def test_create_rejects_bad_date(db_session, valid_form):
    submission = validate_create(db_session, _form(valid_form, tgl_masuk="15/07/2024"))

    assert submission.messages_for("tgl_masuk") == ["Tanggal masuk tidak valid!"]


def test_create_missing_date_reports_required_only(db_session, valid_form):
    submission = validate_create(db_session, _form(valid_form, tgl_masuk=""))

    assert submission.messages_for("tgl_masuk") == ["Tanggal masuk wajib diisi!"]


def test_update_same_nisn_is_not_a_collision(db_session, valid_form, make_student):
    make_student()

    submission = validate_update(db_session, _form(valid_form), previous_nisn="12345678")

    assert submission.is_valid


def test_update_nisn_owned_by_other_record(db_session, valid_form, make_student):
    make_student()
    make_student(nisn="87654321", nik="6543210987654321")

    submission = validate_update(
        db_session,
        _form(valid_form, nisn="12345678", nik="6543210987654321"),
        previous_nisn="87654321",
    )

    assert submission.messages_for("nisn") == ["NISN sudah digunakan!"]


def test_update_free_nisn_is_accepted(db_session, valid_form, make_student):
    make_student()

    submission = validate_update(
        db_session, _form(valid_form, nisn="11112222"), previous_nisn="12345678"
    )

    assert submission.is_valid


def test_update_nokk_non_numeric(db_session, valid_form, make_student):
    make_student()

    submission = validate_update(
        db_session, _form(valid_form, nokk="12345678901234AB"), previous_nisn="12345678"
    )

    assert submission.messages_for("nokk") == ["No. KK harus angka!"]


def test_update_nokk_wrong_length(db_session, valid_form, make_student):
    make_student()

    submission = validate_update(
        db_session, _form(valid_form, nokk="123"), previous_nisn="12345678"
    )

    assert submission.messages_for("nokk") == ["No. KK harus 16 digit angka!"]


def test_update_nokk_both_rules_fail(db_session, valid_form, make_student):
    make_student()

    submission = validate_update(
        db_session, _form(valid_form, nokk="12ab"), previous_nisn="12345678"
    )

    assert submission.messages_for("nokk") == [
        "No. KK harus 16 digit angka!",
        "No. KK harus angka!",
    ]


def test_form_from_mapping_ignores_unknown_fields():
    form = StudentForm.from_mapping({"nisn": "12345678", "oldNisn": "x", "_method": "PUT"})

    assert form.nisn == "12345678"
    assert form.nama == ""
    assert not hasattr(form, "oldNisn")


@pytest.mark.parametrize(
    "field, size, message",
    [
        ("nama", 121, "Nama terlalu panjang!"),
        ("ttl", 121, "Tempat, tanggal lahir terlalu panjang!"),
        ("rombel", 41, "Rombel terlalu panjang!"),
        ("jk", 21, "Jenis kelamin terlalu panjang!"),
    ],
)
def test_create_enforces_column_bounds(db_session, valid_form, field, size, message):
    submission = validate_create(db_session, _form(valid_form, **{field: "x" * size}))

    assert submission.messages_for(field) == [message]


def test_update_enforces_identifier_bounds(db_session, valid_form, make_student):
    make_student()

    submission = validate_update(
        db_session, _form(valid_form, nik="1" * 33), previous_nisn="12345678"
    )

    assert submission.messages_for("nik") == ["NIK terlalu panjang!"]


def test_values_at_column_bound_are_accepted(db_session, valid_form):
    submission = validate_create(db_session, _form(valid_form, nama="x" * 120))

    assert submission.is_valid


def test_rule_without_passes_cannot_be_built():
    from dataclasses import dataclass

    from app.services.student_validator import Rule

    @dataclass(frozen=True)
    class Incomplete(Rule):
        pass

    with pytest.raises(TypeError):
        Incomplete("nama", "x")
