"""Tests for the profile reconciler."""

import pytest

from folio.db.memory_store import MemoryStore
from folio.errors import ExperienceNotFound, ProfileNotFound
from folio.services.profiles import ProfileReconciler, build_profile_fields, split_skills
from folio.utils.serialization import public


def test_split_skills_trims_each_piece():
    assert split_skills("node, react , sql") == ["node", "react", "sql"]


def test_split_skills_keeps_empty_pieces():
    assert split_skills("python,,go") == ["python", "", "go"]


def test_build_profile_fields_routes_keys():
    fields = build_profile_fields("u1", {
        "status": "Developer",
        "company": "Acme",
        "skills": "python, go",
        "twitter": "https://twitter.com/ada",
        "linkedin": "https://linkedin.com/in/ada",
        "pronouns": "she/her",
    })

    assert fields == {
        "user": "u1",
        "status": "Developer",
        "company": "Acme",
        "skills": ["python", "go"],
        "social": {"twitter": "https://twitter.com/ada", "linkedin": "https://linkedin.com/in/ada"},
        "pronouns": "she/her",
    }


def test_build_profile_fields_ignores_reserved_keys():
    fields = build_profile_fields("u1", {"user": "intruder", "experience": [], "status": "x"})

    assert fields["user"] == "u1"
    assert "experience" not in fields


@pytest.mark.asyncio
async def test_upsert_creates_then_patches():
    profiles = ProfileReconciler(MemoryStore())

    created = await profiles.upsert("u1", {"status": "Developer", "skills": "python", "bio": "hi"})
    updated = await profiles.upsert("u1", {"status": "Lead", "skills": "python, go"})

    assert updated["id"] == created["id"]
    assert updated["status"] == "Lead"
    assert updated["skills"] == ["python", "go"]
    # Fields missing from the update keep their stored value
    assert updated["bio"] == "hi"
    assert updated["user"] == "u1"


@pytest.mark.asyncio
async def test_upsert_is_idempotent():
    profiles = ProfileReconciler(MemoryStore())
    raw = {"status": "Developer", "skills": "node, react , sql", "youtube": "https://youtube.com/ada"}

    await profiles.upsert("u1", raw)
    once = public(await profiles.get_mine("u1"))
    await profiles.upsert("u1", raw)
    twice = public(await profiles.get_mine("u1"))

    assert once == twice


@pytest.mark.asyncio
async def test_social_links_are_replaced_as_a_unit():
    profiles = ProfileReconciler(MemoryStore())

    await profiles.upsert("u1", {"status": "x", "skills": "a", "twitter": "t", "youtube": "y"})
    profile = await profiles.upsert("u1", {"status": "x", "skills": "a", "twitter": "t2"})

    assert profile["social"] == {"twitter": "t2"}


@pytest.mark.asyncio
async def test_experience_entries_are_newest_first():
    profiles = ProfileReconciler(MemoryStore())
    await profiles.upsert("u1", {"status": "x", "skills": "a"})

    await profiles.add_experience("u1", {"title": "Junior", "company": "A", "from": "2018-01-01"})
    profile = await profiles.add_experience("u1", {"title": "Senior", "company": "B", "from": "2021-01-01"})

    assert [entry["title"] for entry in profile["experience"]] == ["Senior", "Junior"]
    assert all(entry["id"] for entry in profile["experience"])


@pytest.mark.asyncio
async def test_remove_experience_by_id():
    profiles = ProfileReconciler(MemoryStore())
    await profiles.upsert("u1", {"status": "x", "skills": "a"})
    await profiles.add_experience("u1", {"title": "Junior", "company": "A", "from": "2018-01-01"})
    profile = await profiles.add_experience("u1", {"title": "Senior", "company": "B", "from": "2021-01-01"})
    junior_id = profile["experience"][1]["id"]

    profile = await profiles.remove_experience("u1", junior_id)

    assert [entry["title"] for entry in profile["experience"]] == ["Senior"]


@pytest.mark.asyncio
async def test_remove_unknown_experience_leaves_profile_untouched():
    profiles = ProfileReconciler(MemoryStore())
    await profiles.upsert("u1", {"status": "x", "skills": "a"})
    await profiles.add_experience("u1", {"title": "Junior", "company": "A", "from": "2018-01-01"})

    with pytest.raises(ExperienceNotFound):
        await profiles.remove_experience("u1", "missing")
    assert len((await profiles.get_mine("u1"))["experience"]) == 1


@pytest.mark.asyncio
async def test_update_education_patches_fields():
    profiles = ProfileReconciler(MemoryStore())
    await profiles.upsert("u1", {"status": "x", "skills": "a"})
    profile = await profiles.add_education("u1", {
        "school": "MIT", "degree": "BSc", "fieldofstudy": "CS", "from": "2010-09-01",
    })
    entry_id = profile["education"][0]["id"]

    profile = await profiles.update_education("u1", entry_id, {"degree": "MSc", "current": True})

    entry = profile["education"][0]
    assert entry["id"] == entry_id
    assert entry["degree"] == "MSc"
    assert entry["school"] == "MIT"
    assert entry["current"] is True


@pytest.mark.asyncio
async def test_sections_require_a_profile():
    profiles = ProfileReconciler(MemoryStore())

    with pytest.raises(ProfileNotFound):
        await profiles.add_education("u1", {"school": "MIT", "degree": "BSc", "fieldofstudy": "CS", "from": "2010"})
    with pytest.raises(ProfileNotFound):
        await profiles.remove_experience("u1", "any")
    with pytest.raises(ProfileNotFound):
        await profiles.get_by_user("not-an-id")


def test_build_profile_fields_drops_path_and_operator_keys():
    fields = build_profile_fields("u1", {
        "status": "x",
        "experience.0.id": "hijacked",
        "user.name": "intruder",
        "$where": "sleep(1000)",
        "a.b": 1,
        "hobby": "chess",
    })

    assert fields == {"user": "u1", "social": {}, "status": "x", "hobby": "chess"}


@pytest.mark.asyncio
async def test_upsert_ignores_path_keys_aimed_at_sub_collections():
    profiles = ProfileReconciler(MemoryStore())
    await profiles.upsert("u1", {"status": "Developer", "skills": "python"})
    await profiles.add_experience("u1", {"title": "Dev", "company": "Acme", "from": "2020-01-01"})

    profile = await profiles.upsert("u1", {"status": "Lead", "experience.0.title": "CEO"})

    assert profile["status"] == "Lead"
    assert profile["experience"][0]["title"] == "Dev"
    assert "experience.0.title" not in profile
