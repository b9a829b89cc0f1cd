from common.decision_rules.context import DefaultFieldResolver, RuleContext, stringify


def test_reference_aliases_resolve():
    resolver = DefaultFieldResolver()
    facts = {
        "locationType": "freezone",
        "activityRiskLevel": "high",
        "planCode": "premium",
        "emirate": "Dubai",
        "nationality": "AE",
    }
    assert resolver.resolve(facts, "jurisdiction.type") == "freezone"
    assert resolver.resolve(facts, "jurisdiction_type") == "freezone"
    assert resolver.resolve(facts, "activity.risk_level") == "high"
    assert resolver.resolve(facts, "risk_level") == "high"
    assert resolver.resolve(facts, "plan.code") == "premium"
    assert resolver.resolve(facts, "plan_code") == "premium"
    assert resolver.resolve(facts, "jurisdiction.emirate") == "Dubai"
    assert resolver.resolve(facts, "country") == "AE"


def test_snake_case_context_keys_are_tolerated():
    resolver = DefaultFieldResolver()
    facts = {"jurisdiction_type": "mainland", "risk_level": "low", "plan_code": "basic"}
    assert resolver.resolve(facts, "jurisdiction.type") == "mainland"
    assert resolver.resolve(facts, "activity.risk_level") == "low"
    assert resolver.resolve(facts, "plan.code") == "basic"


def test_nested_context_is_walked_by_dotted_path():
    resolver = DefaultFieldResolver()
    facts = {"country": {"risk_level": "prohibited", "code": "XX"}}
    assert resolver.resolve(facts, "country.risk_level") == "prohibited"


def test_unmapped_field_falls_back_to_direct_key():
    resolver = DefaultFieldResolver()
    assert resolver.resolve({"custom_flag": True}, "custom_flag") == "true"


def test_unresolved_field_is_empty_string():
    resolver = DefaultFieldResolver()
    assert resolver.resolve({}, "jurisdiction.type") == ""
    assert resolver.resolve({"country": "AE"}, "country.code.extra") == ""


def test_field_names_are_case_sensitive():
    resolver = DefaultFieldResolver()
    assert resolver.resolve({"locationType": "freezone"}, "Jurisdiction.Type") == ""


def test_custom_field_map():
    resolver = DefaultFieldResolver({"tier": ("customerTier",)})
    assert resolver.resolve({"customerTier": "gold"}, "tier") == "gold"
    assert resolver.resolve({"locationType": "freezone"}, "jurisdiction.type") == ""


def test_stringify():
    assert stringify(None) == ""
    assert stringify(False) == "false"
    assert stringify(15000.0) == "15000"
    assert stringify(2.5) == "2.5"
    assert stringify(["a", 1]) == "a,1"


def test_rule_context_uses_resolver():
    ctx = RuleContext(facts={"emirate": "Ajman"})
    assert ctx.get_field_value("emirate") == "Ajman"
