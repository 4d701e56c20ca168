import pytest
from sqlalchemy import select

from formio_import.application.use_cases.global_translation_use_cases import (
    GlobalTranslationUseCases,
    group_by_tag,
)
from formio_import.infrastructure.database.models import (
    GlobalTranslationModel,
    GlobalTranslationRevisionModel,
    PublishedGlobalTranslationModel,
    PublishedGlobalTranslationRevisionModel,
)
from formio_import.infrastructure.repositories.translation_repository import TranslationRepository
from formio_import.shared.exceptions.domain import GlobalPersistenceException

from tests.conftest import count_rows


@pytest.fixture
def use_cases(settings, formio, session_factory) -> GlobalTranslationUseCases:
    return GlobalTranslationUseCases(settings=settings, formio=formio, session_factory=session_factory)


@pytest.fixture
def global_submissions(make_submission):
    return [
        make_submission("nn-NO", {"required": "Du må fylle ut: {{field}}"}, tag="validering"),
        make_submission("en", {"required": "{{field}} is required"}, tag="validering"),
        make_submission("en", {"Neste steg": "Next step", "Forrige steg": "Previous step"}, tag="skjematekster"),
    ]


def test_group_by_tag_keeps_first_seen_order(global_submissions) -> None:
    groups = group_by_tag(global_submissions)

    assert list(groups) == ["validering", "skjematekster"]
    assert len(groups["validering"]) == 2


@pytest.mark.asyncio
async def test_validation_tag_stores_null_default_value(
    use_cases, formio, session_factory, global_submissions
) -> None:
    formio.fetch_global_translations.return_value = global_submissions

    result = await use_cases.reconcile()

    assert result.translations_created == 3
    async with session_factory() as session:
        rows = (
            await session.execute(
                select(GlobalTranslationModel.key, GlobalTranslationModel.tag, GlobalTranslationRevisionModel.nb)
                .join(
                    GlobalTranslationRevisionModel,
                    GlobalTranslationRevisionModel.global_translation_id == GlobalTranslationModel.id,
                )
                .order_by(GlobalTranslationModel.id)
            )
        ).all()
    assert [tuple(row) for row in rows] == [
        ("required", "validering", None),
        ("Neste steg", "skjematekster", "Neste steg"),
        ("Forrige steg", "skjematekster", "Forrige steg"),
    ]


@pytest.mark.asyncio
async def test_new_translations_create_snapshot_with_all_revisions(
    use_cases, formio, session_factory, global_submissions, make_submission
) -> None:
    formio.fetch_global_translations.return_value = global_submissions
    first = await use_cases.reconcile()
    formio.fetch_global_translations.return_value = global_submissions + [
        make_submission("en", {"Avbryt": "Cancel"}, tag="skjematekster")
    ]

    second = await use_cases.reconcile()

    assert first.snapshot_created and second.snapshot_created
    assert second.snapshot_id != first.snapshot_id
    assert second.translations_created == 1
    assert second.translations_existing == 3
    async with session_factory() as session:
        in_second = (
            await session.execute(
                select(PublishedGlobalTranslationRevisionModel.global_translation_revision_id).where(
                    PublishedGlobalTranslationRevisionModel.published_global_translation_id == second.snapshot_id
                )
            )
        ).scalars().all()
    assert len(in_second) == 4


@pytest.mark.asyncio
async def test_no_new_translations_reuses_latest_snapshot(
    use_cases, formio, session_factory, global_submissions
) -> None:
    formio.fetch_global_translations.return_value = global_submissions
    first = await use_cases.reconcile()

    second = await use_cases.reconcile()

    assert second.snapshot_created is False
    assert second.snapshot_id == first.snapshot_id
    assert await count_rows(session_factory, PublishedGlobalTranslationModel) == 1
    assert await count_rows(session_factory, GlobalTranslationModel) == 3


@pytest.mark.asyncio
async def test_no_translations_at_all_leaves_no_snapshot(use_cases, session_factory) -> None:
    result = await use_cases.reconcile()

    assert result.snapshot_id is None
    assert await count_rows(session_factory, PublishedGlobalTranslationModel) == 0


@pytest.mark.asyncio
async def test_key_seen_under_two_tags_is_imported_once(use_cases, formio, make_submission) -> None:
    formio.fetch_global_translations.return_value = [
        make_submission("en", {"Ja": "Yes"}, tag="skjematekster"),
        make_submission("en", {"Ja": "Yes"}, tag="statiske-tekster"),
    ]

    result = await use_cases.reconcile()

    assert result.translations_created == 1
    assert result.translations_existing == 0


@pytest.mark.asyncio
async def test_global_values_have_no_length_limit(use_cases, formio, make_submission) -> None:
    formio.fetch_global_translations.return_value = [
        make_submission("en", {"Lang tekst": "x" * 10000}, tag="skjematekster"),
    ]

    result = await use_cases.reconcile()

    assert result.translations_created == 1


@pytest.mark.asyncio
async def test_persistence_failure_rolls_back_and_is_fatal(
    use_cases, formio, session_factory, global_submissions, monkeypatch
) -> None:
    formio.fetch_global_translations.return_value = global_submissions
    original = TranslationRepository.upsert_global_translation
    calls = {"n": 0}

    async def failing_upsert(self, tag, candidate, **kwargs):
        calls["n"] += 1
        if calls["n"] == 2:
            raise RuntimeError("connection lost")
        return await original(self, tag, candidate, **kwargs)

    monkeypatch.setattr(TranslationRepository, "upsert_global_translation", failing_upsert)

    with pytest.raises(GlobalPersistenceException) as exc_info:
        await use_cases.reconcile()

    assert exc_info.value.error_code == "GLOBAL_PERSISTENCE_ERROR"
    assert await count_rows(session_factory, GlobalTranslationModel) == 0


@pytest.mark.asyncio
async def test_dry_run_writes_no_translations_or_snapshot(
    dry_run_settings, formio, session_factory, global_submissions
) -> None:
    use_cases = GlobalTranslationUseCases(
        settings=dry_run_settings, formio=formio, session_factory=session_factory
    )
    formio.fetch_global_translations.return_value = global_submissions

    result = await use_cases.reconcile()

    assert result.translations_created == 3
    assert result.snapshot_created is False
    assert await count_rows(session_factory, GlobalTranslationModel) == 0
    assert await count_rows(session_factory, PublishedGlobalTranslationModel) == 0
