from smart_translate.languages import LANGUAGE_NAMES, is_known_language, list_language_names


def test_names_sorted_case_insensitively():
    langs = [{"name": "spanish"}, {"name": "English"}, {"name": "Chinese"}, {"name": "arabic"}]
    assert list_language_names(langs) == ["arabic", "Chinese", "English", "spanish"]


def test_all_names_kept_including_duplicates():
    langs = [{"name": "French"}, {"name": "German"}, {"name": "French"}]
    assert list_language_names(langs) == ["French", "French", "German"]


def test_sorting_is_idempotent():
    names = list_language_names()
    again = list_language_names({"name": n} for n in names)
    assert again == names


def test_packaged_catalog():
    assert "Chinese" in LANGUAGE_NAMES
    assert "English" in LANGUAGE_NAMES
    assert list(LANGUAGE_NAMES) == sorted(LANGUAGE_NAMES, key=str.casefold)
    assert is_known_language("Japanese")
    assert not is_known_language("Klingon")
