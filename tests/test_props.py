from flashy.services.props import parse_props, take_block_props, take_card_props


def test_known_keys():
    props = parse_props("bg=#2c3e50 color=white")
    assert props.bg == "#2c3e50"
    assert props.color == "white"


def test_unknown_and_malformed_tokens_are_skipped():
    props = parse_props("font=mono bg= color novalue=x color=red")
    assert props.bg is None
    assert props.color == "red"


def test_empty_line():
    props = parse_props("   ")
    assert props.bg is None and props.color is None


def test_block_props_consumed_with_newline():
    props, rest = take_block_props("[[bg=#111]]\nQ1\n=A")
    assert props.bg == "#111"
    assert rest == "Q1\n=A"


def test_block_props_only_on_first_line():
    src = "Q1\n[[bg=#111]]\n=A"
    props, rest = take_block_props(src)
    assert props.bg is None
    assert rest == src


def test_card_props_line():
    props, lines = take_card_props(["[color=red]", "Q", "=A"])
    assert props.color == "red"
    assert lines == ["Q", "=A"]


def test_card_props_absent():
    props, lines = take_card_props(["Q", "=A"])
    assert props.bg is None
    assert lines == ["Q", "=A"]
