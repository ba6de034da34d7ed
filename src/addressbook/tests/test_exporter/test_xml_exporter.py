import xml.etree.ElementTree as ET
from datetime import date

import pytest

from addressbook.exporter.xml_exporter import (
    CONTACT_TEMPLATE,
    ROOT_TAG,
    build_address_book,
    export_filename,
    export_xml,
    render_address_book,
)
from addressbook.models.entry import Entry


def items(root: ET.Element) -> tuple[list[ET.Element], list[ET.Element]]:
    all_items = root.findall("Item")
    contacts = [i for i in all_items if i.get("Type") == "Contact"]
    keys = [i for i in all_items if i.get("Type") == "OneTouchKey"]
    return contacts, keys


class TestBuild:

    def test_one_contact_and_one_key_per_entry(self, sample_entries):
        root = build_address_book(sample_entries)
        contacts, keys = items(root)

        assert root.tag == ROOT_TAG
        assert len(contacts) == len(keys) == 3
        # every contact precedes every key
        assert list(root.iter("Item"))[:3] == contacts

    def test_contact_attributes_follow_device_order(self, sample_entry):
        contact, _ = items(build_address_book([sample_entry]))

        assert list(contact[0].attrib) == [key for key, _ in CONTACT_TEMPLATE]
        assert contact[0].get("DisplayName") == "Test One"
        assert contact[0].get("MailAddress") == "test1@test.com"
        assert contact[0].get("SendKeisyou") == ""
        assert contact[0].get("FtpPort") == "21"
        assert contact[0].get("FaxCommSpeed") == "BPS_33600"

    def test_one_touch_keys_point_at_contacts(self, sample_entries):
        contacts, keys = items(build_address_book(sample_entries))

        assert list(keys[0].attrib) == ["Id", "AddressId", "Type", "AddressType", "DisplayName"]
        for contact, key in zip(contacts, keys):
            assert key.get("AddressId") == contact.get("Id")
            assert key.get("DisplayName") == contact.get("DisplayName")
            assert key.get("AddressType") == "Email"

    def test_ids_are_positions_not_storage_ids(self, populated_repo):
        populated_repo.delete("username1")

        contacts, keys = items(build_address_book(populated_repo.all()))

        assert [c.get("Id") for c in contacts] == ["1", "2"]
        assert [k.get("Id") for k in keys] == ["1", "2"]


class TestRender:

    def test_document_shape(self, sample_entries):
        text = render_address_book(sample_entries)

        assert text.startswith(f"<{ROOT_TAG}>")
        assert not text.startswith("<?xml")
        assert "<!--Contact List-->" in text
        assert "<!--Email One Touch Keys-->" in text
        assert text.index("Contact List") < text.index("Email One Touch Keys")
        assert "</Item>" not in text
        assert '\n    <Item Id="1" Type="Contact"' in text

    def test_empty_table(self):
        text = render_address_book([])

        assert ET.fromstring(text).findall("Item") == []
        assert "<!--Contact List-->" in text

    def test_names_are_escaped(self):
        text = render_address_book([Entry(name="Tom & Jerry", username="tj", email="tj@cartoon.com")])

        assert ET.fromstring(text).find("Item").get("DisplayName") == "Tom & Jerry"


class TestExport:

    @pytest.mark.parametrize(
        "today, expected",
        [
            (date(2024, 3, 5), "default_table 2024-Mar-05.xml"),
            (date(2023, 12, 31), "default_table 2023-Dec-31.xml"),
        ],
    )
    def test_filename(self, today, expected):
        assert export_filename("default_table", today) == expected

    def test_writes_file_for_current_table(self, populated_repo, tmp_path):
        out = tmp_path / "Address Books"

        path = export_xml(populated_repo, out, today=date(2024, 1, 9))

        assert path == out / "default_table 2024-Jan-09.xml"
        contacts, _ = items(ET.parse(path).getroot())
        assert [c.get("DisplayName") for c in contacts] == ["Test One", "Test Two", "Test Three"]

    def test_overwrites_existing_file(self, populated_repo, tmp_path):
        today = date(2024, 1, 9)
        export_xml(populated_repo, tmp_path, today=today)
        populated_repo.clear_table()

        path = export_xml(populated_repo, tmp_path, today=today)

        assert ET.parse(path).getroot().findall("Item") == []

    def test_reads_the_table_once(self, populated_repo, tmp_path, monkeypatch):
        calls = []
        original = populated_repo.all

        def counting_all():
            calls.append(1)
            return original()

        monkeypatch.setattr(populated_repo, "all", counting_all)

        export_xml(populated_repo, tmp_path, today=date(2024, 1, 9))

        assert len(calls) == 1
