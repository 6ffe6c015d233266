import re

from portal.utils.filenames import generate_stored_name, normalize_display_name, safe_extension


def test_display_name_strips_unsafe_characters_and_collapses_spaces():
    assert normalize_display_name("Annual  report (final)!.pdf") == "Annual_report_final.pdf"


def test_display_name_truncates_base_but_keeps_extension():
    name = normalize_display_name("a" * 80 + ".docx")
    assert name == "a" * 50 + ".docx"


def test_display_name_drops_directories():
    assert normalize_display_name("../../etc/passwd.txt") == "passwd.txt"


def test_display_name_for_missing_name():
    assert normalize_display_name(None) == "unnamed_file"
    assert normalize_display_name("") == "unnamed_file"


def test_safe_extension():
    assert safe_extension("Photo.JPG") == ".jpg"
    assert safe_extension("archive") == ""
    assert safe_extension("weird.p/h") == ""
    assert safe_extension("evil.ph p") == ""


def test_generated_name_ignores_client_name():
    name = generate_stored_name("document", "../secret report.pdf")
    assert re.fullmatch(r"document-\d{13}-\d{9}\.pdf", name)


def test_generated_names_differ():
    names = {generate_stored_name("image", "a.png") for _ in range(50)}
    assert len(names) == 50
