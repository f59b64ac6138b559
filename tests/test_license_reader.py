import pytest

from liccheck.constants import EventType, Severity
from liccheck.license_reader import FullLicenseInfo, LicenseReader


def _write(tmp_path, name, body):
    path = tmp_path / name
    path.write_text(body, encoding="utf-8")
    return str(path)


GOOD = "[DEFAULT]\nsig = abc\nlic_ver = 200\nvalid-to = 2099-12-31\n"


def test_reads_complete_license(tmp_path):
    path = _write(tmp_path, "a.lic", GOOD)
    licenses, registry = LicenseReader([path]).read_licenses("default")
    assert len(licenses) == 1
    lic = licenses[0]
    assert lic.source == path
    assert lic.project == "default"
    assert lic.license_signature == "abc"
    assert lic.limits == {"sig": "abc", "lic_ver": "200", "valid-to": "2099-12-31"}
    assert registry.is_good()
    assert registry.events[-1].event_type == EventType.PRODUCT_FOUND


def test_missing_file(tmp_path):
    path = str(tmp_path / "missing.lic")
    licenses, registry = LicenseReader([path]).read_licenses("DEFAULT")
    assert licenses == []
    failure = registry.last_failure()
    assert failure.event_type == EventType.LICENSE_FILE_NOT_FOUND
    assert failure.license_reference == path


def test_no_sources():
    licenses, registry = LicenseReader([]).read_licenses("DEFAULT")
    assert licenses == []
    failure = registry.last_failure()
    assert failure.event_type == EventType.LICENSE_FILE_NOT_FOUND
    assert failure.license_reference == "UNDEF"


def test_product_not_licensed(tmp_path):
    path = _write(tmp_path, "a.lic", GOOD)
    licenses, registry = LicenseReader([path]).read_licenses("OTHER")
    assert licenses == []
    assert registry.last_failure().event_type == EventType.PRODUCT_NOT_LICENSED


def test_empty_section_not_licensed(tmp_path):
    path = _write(tmp_path, "a.lic", "[DEFAULT]\n[OTHER]\nsig=x\n")
    licenses, registry = LicenseReader([path]).read_licenses("DEFAULT")
    assert licenses == []
    assert registry.last_failure().event_type == EventType.PRODUCT_NOT_LICENSED


@pytest.mark.parametrize(
    "body",
    ["[DEFAULT]\nsig = abc\nlic_ver = 100\n", "[DEFAULT]\nlic_ver = 200\n"],
)
def test_malformed(tmp_path, body):
    path = _write(tmp_path, "a.lic", body)
    licenses, registry = LicenseReader([path]).read_licenses("DEFAULT")
    assert licenses == []
    assert registry.last_failure().event_type == EventType.LICENSE_MALFORMED


def test_undecodable_file(tmp_path):
    path = tmp_path / "a.lic"
    path.write_bytes(b"[DEFAULT]\nsig=\xff\xfe\x80\n")
    licenses, registry = LicenseReader([str(path)]).read_licenses("DEFAULT")
    assert licenses == []
    assert registry.last_failure().event_type == EventType.FILE_FORMAT_NOT_RECOGNIZED


def test_one_good_file_keeps_warnings(tmp_path):
    good = _write(tmp_path, "a.lic", GOOD)
    missing = str(tmp_path / "nope.lic")
    licenses, registry = LicenseReader([missing, good]).read_licenses("DEFAULT")
    assert [lic.source for lic in licenses] == [good]
    assert registry.last_failure() is None
    assert all(ev.severity != Severity.ERROR for ev in registry.events)


def test_semicolon_separated_sources(tmp_path):
    first = _write(tmp_path, "a.lic", GOOD)
    second = _write(tmp_path, "b.lic", GOOD)
    licenses, _ = LicenseReader(f"{first};{second}").read_licenses("DEFAULT")
    assert [lic.source for lic in licenses] == [first, second]


def test_comments_whitespace_and_duplicates(tmp_path):
    body = "; comment\n# other\n[ default ]\n  sig =  first \nSIG = second\n lic_ver = 0xC8\n"
    path = _write(tmp_path, "a.lic", body)
    licenses, _ = LicenseReader([path]).read_licenses("DEFAULT")
    assert len(licenses) == 1
    assert licenses[0].license_signature == "second"
    assert licenses[0].limits == {"sig": "second", "lic_ver": "0xC8"}


def test_print_for_sign_skips_signature_and_sorts():
    info = FullLicenseInfo("src", " proj ", "xyz", limits={"b": " 2 ", "a": "1", "sig": "xyz"})
    assert info.print_for_sign() == "PROJa1b2"


def test_print_for_sign_without_limits():
    assert FullLicenseInfo("src", "name", "s").print_for_sign() == "NAME"