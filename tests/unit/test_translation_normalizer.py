from formio_import.application.services.translation_normalizer import normalize_submissions


def test_keys_keep_first_seen_order_across_submissions(make_submission) -> None:
    submissions = [
        make_submission("en", {"Fornavn": "First name", "Etternavn": "Last name"}),
        make_submission("nn-NO", {"Adresse": "Adresse", "Fornavn": "Førenamn"}),
    ]

    result = normalize_submissions(submissions, subject="NAV 10-07.17")

    assert result.keys == ["Fornavn", "Etternavn", "Adresse"]


def test_nynorsk_region_code_is_merged_into_nn_slot(make_submission) -> None:
    result = normalize_submissions(
        [make_submission("nn-NO", {"Fornavn": "Førenamn"})], subject="NAV 10-07.17"
    )

    assert result.nn == {"Fornavn": "Førenamn"}
    assert result.en == {}
    assert result.values_for("Fornavn") == ("Førenamn", None)


def test_duplicate_language_overwrites_overlapping_keys_and_is_reported(make_submission) -> None:
    submissions = [
        make_submission("en", {"Fornavn": "First name", "Ja": "Yes"}),
        make_submission("en", {"Fornavn": "Given name"}),
    ]

    result = normalize_submissions(submissions, subject="NAV 10-07.17")

    assert result.en == {"Fornavn": "Given name", "Ja": "Yes"}
    assert result.duplicate_languages == ["en"]


def test_nn_and_nn_no_count_as_the_same_language(make_submission) -> None:
    submissions = [
        make_submission("nn", {"Ja": "Ja"}),
        make_submission("nn-NO", {"Nei": "Nei"}),
    ]

    result = normalize_submissions(submissions, subject="NAV 10-07.17")

    assert result.duplicate_languages == ["nn"]
    assert result.nn == {"Ja": "Ja", "Nei": "Nei"}


def test_unsupported_language_contributes_keys_but_no_values(make_submission) -> None:
    submissions = [
        make_submission("se", {"Fornavn": "Ovdanamma"}),
        make_submission("en", {"Etternavn": "Last name"}),
    ]

    result = normalize_submissions(submissions, subject="NAV 10-07.17")

    assert result.keys == ["Fornavn", "Etternavn"]
    assert result.values_for("Fornavn") == (None, None)
    assert result.duplicate_languages == []


def test_empty_input_gives_empty_result() -> None:
    result = normalize_submissions([], subject="global:validering")

    assert result.keys == []
    assert result.nn == {}
    assert result.en == {}
