from pacifico_portal import downloads, fallback, models


def make_file(file_id, name, **overrides):
    base = {
        "id": file_id,
        "name": name,
        "type": "pdf",
        "size": "1 MB",
        "uploadDate": "2024-08-01",
        "category": "forms",
        "url": f"/files/{file_id}",
    }
    base.update(overrides)
    return models.DownloadFile(**base)


def test_search_matches_name_or_description_case_insensitively():
    files = [
        make_file("1", "October Newsletter", category="newsletters"),
        make_file("2", "Monthly update", description="The NEWSLETTER for November"),
        make_file("3", "Permission form"),
        make_file("4", "Handbook", description=None),
    ]
    result = downloads.filter_files(files, "newsletter", "all", "all")
    assert [f.id for f in result] == ["1", "2"]


def test_category_and_type_are_combined():
    files = fallback.sample_files()
    result = downloads.filter_files(files, "", "forms", "pdf")
    assert [f.id for f in result] == ["2"]
    assert all(f.category == "forms" and f.type == "pdf" for f in result)


def test_filter_preserves_input_order():
    files = [
        make_file("z", "Zeta form"),
        make_file("a", "Alpha form"),
        make_file("m", "Mu form"),
    ]
    result = downloads.filter_files(files, "form")
    assert [f.id for f in result] == ["z", "a", "m"]


def test_empty_criteria_match_everything():
    files = fallback.sample_files()
    assert downloads.filter_files(files) == files


def test_no_match_returns_empty_list():
    files = fallback.sample_files()
    assert downloads.filter_files(files, "no such file") == []
    assert downloads.filter_files(files, "", "videos", "pdf") == []


def test_find_file():
    files = fallback.sample_files()
    assert downloads.find_file(files, "5").name == "Grade 5 Play Recording"
    assert downloads.find_file(files, "missing") is None
