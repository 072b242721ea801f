from ai_text_detector.segmentation import (
    segment,
    split_sentence_spans,
    split_sentences,
    split_words,
)


def test_segment_counts_words_and_sentences():
    sample = segment("First sentence. Second sentence with more words.")

    assert len(sample.words) == 7
    assert sample.sentences == ("First sentence", "Second sentence with more words")


def test_segment_empty_and_whitespace_text():
    for text in ("", "   \n\t "):
        sample = segment(text)
        assert sample.words == ()
        assert sample.sentences == ()
        assert sample.is_empty


def test_split_sentences_collapses_terminator_runs():
    assert split_sentences("Hi!!! There?.. Done") == ["Hi", "There", "Done"]
    assert split_sentences("...!?") == []


def test_split_words_ignores_whitespace_runs():
    assert split_words("  one\ttwo \n three  ") == ["one", "two", "three"]


def test_sentence_spans_reassemble_input():
    text = "One. Two!  Three"
    spans = split_sentence_spans(text)

    assert spans == ["One. ", "Two!  ", "Three"]
    assert "".join(spans) == text


def test_sentence_spans_keep_leading_whitespace():
    text = "  Lead in... and more? "
    assert "".join(split_sentence_spans(text)) == text
    assert split_sentence_spans("") == []
