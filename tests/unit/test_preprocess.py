from chat_translator.services.preprocess import preprocess_text


def test_expands_shortforms():
    result = preprocess_text("thx u r the best")
    assert result.processed == "thanks you are the best"
    assert result.flags.had_shortforms
    assert not result.flags.had_slang


def test_keeps_punctuation_around_shortforms():
    assert preprocess_text("where r u?").processed == "where are you?"
    assert preprocess_text("(gm)!").processed == "(good morning)!"


def test_matching_is_case_insensitive():
    assert preprocess_text("GM").processed == "good morning"


def test_flags_slang_without_rewriting():
    result = preprocess_text("that party was lit lol")
    assert result.processed == "that party was lit lol"
    assert result.flags.had_slang
    assert not result.flags.had_shortforms


def test_flags_sarcasm():
    assert preprocess_text("Oh great, another meeting").flags.had_sarcasm
    assert preprocess_text("yeah right").flags.had_sarcasm
    assert not preprocess_text("this is great").flags.had_sarcasm


def test_empty_text_unchanged():
    result = preprocess_text("   ")
    assert result.processed == "   "
    assert result.flags.to_dict() == {
        "had_shortforms": False,
        "had_slang": False,
        "had_sarcasm": False,
    }


def test_non_latin_text_passes_through():
    assert preprocess_text("सुप्रभात दोस्तों").processed == "सुप्रभात दोस्तों"


def test_collapses_whitespace():
    assert preprocess_text("see  you\ttomorrow").processed == "see you tomorrow"
