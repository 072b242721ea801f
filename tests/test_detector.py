import pytest

from ai_text_detector import (
    Detector,
    DetectorConfig,
    HighlightSegment,
    InvalidInputError,
    analyze,
    compare,
    default_detector,
    detect_language,
    highlight,
    render_highlight,
    repeating_words,
)

LONG_SENTENCE = (
    "The committee carefully reviewed every proposal submitted during the spring session."
)
SAMPLES = [
    "",
    "Hi.",
    "First sentence. Second sentence with more words.",
    LONG_SENTENCE,
    "Furthermore, the data demonstrates a trend. However, for example, the outliers "
    "remain. Finally, we conclude the study. Moreover, additional work is needed.",
    "??? ... !!!",
    "Привіт, як справи? Я живу в Україні.",
]


def test_score_and_confidence_stay_in_bounds():
    for text in SAMPLES:
        result = analyze(text)
        assert 0 <= result.score <= 100
        assert 0.0 <= result.confidence <= 1.0


def test_empty_text_gives_zero_result():
    result = analyze("")

    assert result.score == 0
    assert result.confidence == 0.0
    assert result.word_count == 0
    assert result.sentence_count == 0
    assert not any(result.factors.values())


def test_word_and_sentence_counts():
    result = analyze("First sentence. Second sentence with more words.")

    assert result.word_count == 7
    assert result.sentence_count == 2


def test_single_uniform_sentence_scores_high():
    result = analyze(LONG_SENTENCE, "en")

    assert result.score == 85
    assert result.baseline == 20
    assert result.factors["sentence_length"] == 25
    assert result.factors["vocabulary"] == 20
    assert result.factors["variance"] == 20
    assert result.confidence == pytest.approx(0.6)
    assert result.language == "en"
    assert result.language_supported


def test_factors_are_read_only():
    result = analyze(LONG_SENTENCE)

    with pytest.raises(TypeError):
        result.factors["density"] = 99  # type: ignore[index]


def test_unsupported_language_halves_confidence():
    supported = analyze(LONG_SENTENCE, "en")
    fallback = analyze(LONG_SENTENCE, "xx")

    assert fallback.language == "unknown"
    assert not fallback.language_supported
    assert fallback.score == supported.score
    assert fallback.confidence == pytest.approx(supported.confidence * 0.5)


def test_non_string_input_is_rejected():
    with pytest.raises(InvalidInputError):
        analyze(None)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        analyze(42)  # type: ignore[arg-type]
    with pytest.raises(InvalidInputError):
        compare("text", None)  # type: ignore[arg-type]
    with pytest.raises(InvalidInputError):
        highlight(b"bytes")  # type: ignore[arg-type]


def test_compare_identical_texts():
    text = SAMPLES[4]
    result = compare(text, text)

    assert result.similarity == 1.0
    assert result.first.score == result.second.score
    assert result.first.confidence == result.second.confidence
    assert result.score_difference == 0


def test_compare_disjoint_vocabularies():
    result = compare("alpha beta gamma.", "delta epsilon zeta.")

    assert result.similarity == pytest.approx(0.0)
    assert result.common_words == ()


def test_compare_partial_overlap_and_empty_inputs():
    result = compare("The cat sat.", "the cat ran!")

    assert result.similarity == pytest.approx(2 / 4)
    assert result.common_words == ("cat", "the")
    assert compare("", "").similarity == 1.0


def test_highlight_reassembles_input():
    for text in SAMPLES:
        segments = highlight(text)
        assert "".join(segment.text for segment in segments) == text
    assert highlight("") == []


def test_highlight_flags_only_spans_above_threshold():
    segments = highlight("Hi. " + LONG_SENTENCE, "en")

    assert [segment.text for segment in segments] == ["Hi. ", LONG_SENTENCE]
    assert segments[0].score == 60
    assert not segments[0].is_flagged
    assert segments[1].score == 85
    assert segments[1].is_flagged


def test_highlight_threshold_is_configurable():
    detector = Detector(DetectorConfig(highlight_threshold=90.0))

    assert not any(segment.is_flagged for segment in detector.highlight(LONG_SENTENCE))


def test_render_highlight_wraps_flagged_spans_and_escapes():
    segments = [
        HighlightSegment(text="Plain <b>. ", score=20, is_flagged=False),
        HighlightSegment(text="Flagged & done.", score=85, is_flagged=True),
    ]

    assert render_highlight(segments) == (
        "Plain &lt;b&gt;. "
        '<span class="ai-highlight" data-score="85">Flagged &amp; done.</span>'
    )


def test_detect_language_codes():
    assert detect_language("") == "unknown"
    english = (
        "The weather this morning was bright and warm, so we walked through the park "
        "with the children. They wanted to watch the ducks on the pond, and then we "
        "went home for lunch. Afterwards they played with their friends in the garden "
        "until it was nearly dark."
    )
    assert detect_language(english) == "en"
    with pytest.raises(InvalidInputError):
        detect_language(None)  # type: ignore[arg-type]


def test_default_language_from_config_is_used():
    detector = Detector(DetectorConfig(default_language="DEU"))

    assert detector.analyze(LONG_SENTENCE).language == "de"
    assert detector.analyze(LONG_SENTENCE, "fr").language == "fr"


def test_larger_increment_never_lowers_score():
    low = Detector(DetectorConfig())
    high_config = DetectorConfig()
    high_config.scoring.variance_increment = 30.0
    high = Detector(high_config)

    for text in SAMPLES:
        assert high.analyze(text).score >= low.analyze(text).score


def test_repeating_words_uses_configured_minimum():
    text = "the cat and the dog and the bird"

    assert repeating_words(text) == [("the", 3)]
    assert repeating_words(text, 2) == [("the", 3), ("and", 2)]
    assert Detector(DetectorConfig(repeating_word_min_count=2)).repeating_words(text) == [
        ("the", 3),
        ("and", 2),
    ]


def test_result_to_dict_is_json_ready():
    payload = analyze(SAMPLES[4]).to_dict()

    assert set(payload) >= {"score", "confidence", "factors", "features", "sentiment"}
    assert payload["features"]["readability"]["flesch_reading_ease"] != 0.0


def test_unmatched_script_uses_fallback_profile():
    result = analyze("Καλημέρα σε όλους, αυτό είναι ένα τεστ.")

    assert result.language == "unknown"
    assert result.language_supported is False


def test_detector_config_cannot_be_changed_after_construction():
    config = DetectorConfig()
    detector = Detector(config)
    before = detector.analyze(LONG_SENTENCE).score

    config.scoring.sentence_length_increment = 0.0
    detector.config.scoring.sentence_length_increment = 0.0

    assert detector.analyze(LONG_SENTENCE).score == before
    assert detector.config.scoring.sentence_length_increment == 25.0


def test_default_detector_config_is_not_shared():
    before = analyze(LONG_SENTENCE).score

    default_detector().config.scoring.baseline = 0.0

    assert analyze(LONG_SENTENCE).score == before
    assert default_detector().config.scoring.baseline == 20.0
