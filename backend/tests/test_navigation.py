from hostel.navigation import SETTINGS_ITEM, navigation_for, navigation_payload


def labels(role):
    return [item.label for item in navigation_for(role)]


def test_admin_sees_seven_items_in_order():
    assert labels("Admin") == [
        "Dashboard", "Students", "Rooms", "Fees", "Visitors", "Complaints", "Announcements",
    ]


def test_warden_is_admin_without_fees():
    admin = [i for i in navigation_for("Admin") if i.label != "Fees"]
    assert list(navigation_for("Warden")) == admin
    assert len(navigation_for("Warden")) == 6


def test_student_menu():
    assert labels("Student") == ["Dashboard", "Announcements", "Complaints"]
    assert set(navigation_for("Student")) <= set(navigation_for("Warden"))


def test_unknown_or_missing_role_falls_back_to_student():
    for role in (None, "", "Janitor", "admin"):
        assert navigation_for(role) == navigation_for("Student")


def test_menus_are_stable_and_non_empty():
    for role in ("Admin", "Warden", "Student"):
        assert navigation_for(role)
        assert navigation_for(role) == navigation_for(role)


def test_icons_and_hrefs():
    fees = next(i for i in navigation_for("Admin") if i.label == "Fees")
    assert fees.href == "/fees"
    assert fees.icon == "CircleDollarSign"


def test_payload_always_has_settings_footer():
    payload = navigation_payload("Warden")
    assert payload["footer"] == [SETTINGS_ITEM._asdict()]
    assert payload["items"][0] == {"label": "Dashboard", "href": "/", "icon": "Home"}
