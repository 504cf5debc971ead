"""
Тесты подписей папок: какие элементы конвертируются, а какие нет.
"""
import pytest

from shelfkit.services.folder_labels import (
    FolderEntry,
    folder_label,
    is_directory_entry,
    is_virtual_collections_entry,
    sort_folder_names,
)
from shelfkit.services.translit import TransliterationReverter


class TestDirectoryDetection:
    """Папка: слэш в конце, флаг файла, затем файловая система."""

    def test_trailing_slash(self):
        assert is_directory_entry(FolderEntry(text="Dozory/"))

    def test_file_flag(self):
        assert not is_directory_entry(FolderEntry(text="Dozory", is_file=True))

    def test_path_on_disk(self, tmp_path):
        folder = tmp_path / "Dozory"
        folder.mkdir()
        assert is_directory_entry(FolderEntry(text="Dozory", path=str(folder)))

    def test_file_attribute_on_disk(self, tmp_path):
        book = tmp_path / "Dozory.epub"
        book.write_text("x", encoding="utf-8")
        assert not is_directory_entry(FolderEntry(text="Dozory", file=str(book)))

    def test_filesystem_not_consulted(self, tmp_path):
        entry = FolderEntry(text="Dozory", path=str(tmp_path))
        assert not is_directory_entry(entry, check_filesystem=False)

    def test_missing_path(self, tmp_path):
        assert not is_directory_entry(FolderEntry(text="Dozory", path=str(tmp_path / "nope")))

    def test_none(self):
        assert not is_directory_entry(None)


class TestCollectionsEntry:
    """Виртуальная папка "Collections" не транслитерируется."""

    def test_flag(self):
        assert is_virtual_collections_entry(FolderEntry(text="Kollieksii/", is_collections_entry=True))

    def test_segment_in_path(self):
        entry = FolderEntry(text="Romany/", path="/books/✪ Collections/Romany")
        assert is_virtual_collections_entry(entry, entry.text)

    def test_segment_in_text(self):
        entry = FolderEntry(text="✪ Kollieksii/")
        assert is_virtual_collections_entry(entry, entry.text)

    def test_symbol_without_space(self):
        entry = FolderEntry(text="✪Kollieksii/")
        assert not is_virtual_collections_entry(entry, entry.text)

    def test_none(self):
        assert not is_virtual_collections_entry(None, "✪ x")


class TestFolderLabel:
    @pytest.fixture
    def reverter(self) -> TransliterationReverter:
        return TransliterationReverter()

    def test_directory_converted(self, reverter):
        assert folder_label(FolderEntry(text="Dozory/"), reverter) == "Дозоры/"

    def test_file_untouched(self, reverter):
        assert folder_label(FolderEntry(text="Dozory", is_file=True), reverter) == "Dozory"

    def test_collections_untouched(self, reverter):
        entry = FolderEntry(text="✪ Romany/")
        assert folder_label(entry, reverter) == "✪ Romany/"

    def test_english_folder_untouched(self, reverter):
        assert folder_label(FolderEntry(text="Documents/"), reverter) == "Documents/"

    def test_empty_text(self, reverter):
        assert folder_label(FolderEntry(text=""), reverter) == ""

    def test_filesystem_check_disabled(self, reverter, tmp_path):
        folder = tmp_path / "Dozory"
        folder.mkdir()
        entry = FolderEntry(text="Dozory", path=str(folder))

        assert folder_label(entry, reverter) == "Дозоры"
        assert folder_label(entry, reverter, check_filesystem=False) == "Dozory"
        assert folder_label(FolderEntry(text="Dozory/"), reverter, check_filesystem=False) == "Дозоры/"

    def test_default_reverter(self):
        assert folder_label(FolderEntry(text="Romany/")) == "Романы/"


def test_sort_folder_names():
    names = ["Romany/", "Архив/", "Briendon Sandierson/"]
    assert sort_folder_names(names) == ["Архив/", "Briendon Sandierson/", "Romany/"]
