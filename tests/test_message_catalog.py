from tipster.messages.catalog import MessageCatalog


def test_defaults_are_available() -> None:
    catalog = MessageCatalog()
    assert catalog.has("out", "welcome")
    assert catalog.get_delay("out", "welcome") == 10000
    assert catalog.get_duration("out", "welcome") == 8000
    assert catalog.get_text("in", "greeting").startswith("Hi!")


def test_override_merges_field_by_field() -> None:
    catalog = MessageCatalog({"out": {"welcome": {"text": "Hello there"}}})
    merged = catalog.get("out", "welcome")
    assert merged["text"] == "Hello there"
    assert merged["delay"] == 10000
    assert merged["duration"] == 8000


def test_unset_override_values_keep_defaults() -> None:
    catalog = MessageCatalog({"out": {"welcome": {"text": "", "delay": None, "duration": 0}}})
    merged = catalog.get("out", "welcome")
    assert merged["text"] == "Ready to help! Click to start a chat"
    assert merged["delay"] == 10000
    # Zero is a value, not an absence.
    assert merged["duration"] == 0


def test_camel_case_override_fields_are_normalized() -> None:
    catalog = MessageCatalog({"out": {"welcome": {"cooldownHours": 2}}})
    assert catalog.get_field("out", "welcome", "cooldown_hours") == 2
    assert catalog.get_field_out("welcome", "cooldownHours") == 2


def test_disable_hides_type() -> None:
    catalog = MessageCatalog({"out": {"welcome": {"disable": True}}})
    assert not catalog.has("out", "welcome")
    assert catalog.get_text("out", "welcome") != ""


def test_new_types_from_overrides() -> None:
    catalog = MessageCatalog({"out": {"promo": {"text": "Sale!", "delay": 500}}, "side": {"x": {"text": "y"}}})
    assert catalog.has("out", "promo")
    assert catalog.get_delay("out", "promo") == 500
    assert "out.promo" in catalog.list_types()
    assert "side.x" in catalog.list_types()
    assert "in.greeting" in catalog.list_types()


def test_unknown_type_yields_empty_definition() -> None:
    catalog = MessageCatalog()
    assert catalog.get("out", "nope") == {"text": "", "delay": 0}
    assert not catalog.has("out", "nope")
    assert not catalog.has("nowhere", "welcome")
    assert catalog.get_definition("out", "nope") is None
    assert catalog.get_field_in("nope", "delay", 7) == 7


def test_get_returns_copies() -> None:
    catalog = MessageCatalog()
    first = catalog.get("out", "welcome")
    first["text"] = "mutated"
    assert catalog.get_text("out", "welcome") != "mutated"


def test_get_definition_is_typed() -> None:
    definition = MessageCatalog().get_definition("out", "followup")
    assert definition is not None
    assert definition.cooldown_hours == 6
    assert definition.disable is False


def test_custom_defaults_replace_builtin_table() -> None:
    catalog = MessageCatalog(defaults={"out": {"only": {"text": "one", "delay": 1}}})
    assert catalog.list_types() == ["out.only"]
