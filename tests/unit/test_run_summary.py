from formio_import.application.dto.import_dto import (
    FormImportResultDTO,
    RunSummaryDTO,
    TooLongTranslationDTO,
)
from formio_import.shared.constants.import_constants import FormImportStatus


def _result(skjemanummer: str, status: FormImportStatus, **kwargs) -> FormImportResultDTO:
    return FormImportResultDTO(skjemanummer=skjemanummer, path=skjemanummer.lower(), status=status, **kwargs)


def test_results_are_sorted_into_summary_lists() -> None:
    summary = RunSummaryDTO()

    summary.add_form_result(_result("NAV 01", FormImportStatus.SUCCESS))
    summary.add_form_result(_result("NAV 02", FormImportStatus.FAILED, error="boom"))
    summary.add_form_result(_result("X" * 25, FormImportStatus.SKJEMANUMMER_TOO_LONG))
    summary.add_form_result(_result("", FormImportStatus.SKIPPED_NO_PROPERTIES))

    assert summary.success_inserts_skjemanummer == ["NAV 01"]
    assert summary.failed_inserts_skjemanummer == ["NAV 02"]
    assert summary.too_long_skjemanummer == ["X" * 25]
    assert summary.skipped_without_properties == [""]
    assert summary.counts == {
        "succeeded": 1,
        "failed": 1,
        "skjemanummer_too_long": 1,
        "value_too_long": 0,
        "more_than_two_translations": 0,
        "skipped_without_properties": 1,
    }


def test_max_translation_length_tracks_longest_rejected_value() -> None:
    summary = RunSummaryDTO()
    too_long = [
        TooLongTranslationDTO(skjemanummer="NAV 01", too_long_key="a", key_length=6000, nn_length=10),
        TooLongTranslationDTO(skjemanummer="NAV 01", too_long_key="b", key_length=1, en_length=7000),
    ]

    summary.add_form_result(_result("NAV 01", FormImportStatus.SUCCESS, too_long_translations=too_long))

    assert summary.max_translation_length == 7000
    assert len(summary.forms_with_too_long_translation) == 2
    assert summary.counts["value_too_long"] == 2


def test_more_than_two_submissions_is_recorded_even_when_form_fails() -> None:
    summary = RunSummaryDTO()

    summary.add_form_result(_result("NAV 01", FormImportStatus.SUCCESS, number_of_translation_submissions=2))
    summary.add_form_result(_result("NAV 02", FormImportStatus.FAILED, number_of_translation_submissions=4))

    assert [(c.skjemanummer, c.number_of_translations) for c in summary.more_than_two_translations] == [
        ("NAV 02", 4)
    ]
