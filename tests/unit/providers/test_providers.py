# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Unit tests for the Direct, HuggingFace and Mintlify providers."""

from __future__ import annotations

import asyncio

import httpx
import pytest
import respx

from mhskills.core.exceptions import (
    FetchError,
    FetchTimeoutError,
    FrontmatterError,
    ProviderMismatchError,
    SkillValidationError,
)
from mhskills.providers import DirectProvider, HuggingFaceProvider, MintlifyProvider

SKILL = "---\nname: X\ndescription: Y\n---\n# Body\n"


class _SlowClient:
    """HTTP client that never answers in time."""

    async def send(self, request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(10)
        return httpx.Response(200, text=SKILL, request=request)


# ---------------------------------------------------------------------------
# Direct
# ---------------------------------------------------------------------------


class TestDirectMatch:
    @pytest.mark.parametrize(
        "url",
        [
            "https://docs.example.com/skill.md",
            "http://example.com/a/b/SKILL.md",
        ],
    )
    def test_matches(self, url: str) -> None:
        assert DirectProvider().match(url).matches

    @pytest.mark.parametrize(
        "url",
        [
            "https://docs.example.com/readme.md",
            "ftp://example.com/skill.md",
            "https://github.com/o/r/blob/main/SKILL.md",
            "https://gitlab.com/o/r/-/raw/main/SKILL.md",
            "https://huggingface.co/spaces/o/s/blob/main/SKILL.md",
        ],
    )
    def test_rejects(self, url: str) -> None:
        assert not DirectProvider().match(url).matches

    def test_match_carries_identifier(self) -> None:
        match = DirectProvider().match("https://docs.example.com/skill.md")
        assert match.source_identifier == "example/com"


class TestDirectFetch:
    @pytest.mark.asyncio
    async def test_fetch_uses_parent_dir_for_install_name(self) -> None:
        url = "https://docs.example.com/skills/My_Skill/SKILL.md"
        with respx.mock:
            route = respx.get(url).mock(return_value=httpx.Response(200, text=SKILL))
            async with httpx.AsyncClient() as client:
                skill = await DirectProvider().fetch_skill(url, client)

        assert skill.name == "X"
        assert skill.description == "Y"
        assert skill.install_name == "my-skill"
        assert skill.content == SKILL
        assert skill.source_url == url
        assert route.calls.last.request.headers["User-Agent"] == "mh-skills"

    @pytest.mark.asyncio
    async def test_root_document_falls_back_to_header_name(self) -> None:
        url = "https://docs.example.com/skill.md"
        with respx.mock:
            respx.get(url).mock(return_value=httpx.Response(200, text=SKILL))
            async with httpx.AsyncClient() as client:
                skill = await DirectProvider().fetch_skill(url, client)

        assert skill.name == "X"
        assert skill.description == "Y"
        assert skill.install_name == "x"

    @pytest.mark.asyncio
    async def test_install_name_metadata(self) -> None:
        url = "https://docs.example.com/a/SKILL.md"
        body = "---\nname: X\ndescription: Y\nmetadata:\n  install-name: Chosen\n---\n"
        with respx.mock:
            respx.get(url).mock(return_value=httpx.Response(200, text=body))
            async with httpx.AsyncClient() as client:
                skill = await DirectProvider().fetch_skill(url, client)
        assert skill.install_name == "chosen"

    @pytest.mark.asyncio
    async def test_http_error_status(self) -> None:
        url = "https://docs.example.com/a/SKILL.md"
        with respx.mock:
            respx.get(url).mock(return_value=httpx.Response(404))
            async with httpx.AsyncClient() as client:
                with pytest.raises(FetchError) as exc_info:
                    await DirectProvider().fetch_skill(url, client)
        assert exc_info.value.status_code == 404
        assert url in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_description(self) -> None:
        url = "https://docs.example.com/a/SKILL.md"
        with respx.mock:
            respx.get(url).mock(return_value=httpx.Response(200, text="---\nname: X\n---\n"))
            async with httpx.AsyncClient() as client:
                with pytest.raises(SkillValidationError, match="name or description"):
                    await DirectProvider().fetch_skill(url, client)

    @pytest.mark.asyncio
    async def test_bad_yaml(self) -> None:
        url = "https://docs.example.com/a/SKILL.md"
        with respx.mock:
            respx.get(url).mock(return_value=httpx.Response(200, text="---\nname: [x\n---\n"))
            async with httpx.AsyncClient() as client:
                with pytest.raises(FrontmatterError, match="docs.example.com"):
                    await DirectProvider().fetch_skill(url, client)

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        url = "https://docs.example.com/a/SKILL.md"
        with respx.mock:
            respx.get(url).mock(side_effect=httpx.ConnectError("refused"))
            async with httpx.AsyncClient() as client:
                with pytest.raises(FetchError, match="refused"):
                    await DirectProvider().fetch_skill(url, client)

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        provider = DirectProvider(timeout=0.05)
        with pytest.raises(FetchTimeoutError):
            await provider.fetch_skill("https://docs.example.com/a/SKILL.md", _SlowClient())


# ---------------------------------------------------------------------------
# HuggingFace
# ---------------------------------------------------------------------------

HF_URL = "https://huggingface.co/spaces/alice/cool-space/blob/main/SKILL.md"
HF_RAW = "https://huggingface.co/spaces/alice/cool-space/raw/main/SKILL.md"


class TestHuggingFace:
    def test_match(self) -> None:
        provider = HuggingFaceProvider()
        assert provider.match(HF_URL).matches
        assert not provider.match("https://huggingface.co/alice/model/SKILL.md").matches
        assert not provider.match("https://huggingface.co/spaces/alice/s/README.md").matches

    def test_raw_url(self) -> None:
        assert HuggingFaceProvider().to_raw_url(HF_URL) == HF_RAW

    def test_identifier(self) -> None:
        provider = HuggingFaceProvider()
        assert provider.get_source_identifier(HF_URL) == "huggingface/alice/cool-space"
        assert provider.get_source_identifier("https://huggingface.co/x") == "huggingface/unknown"

    @pytest.mark.asyncio
    async def test_fetch_uses_raw_url_and_space_name(self) -> None:
        with respx.mock:
            route = respx.get(HF_RAW).mock(return_value=httpx.Response(200, text=SKILL))
            async with httpx.AsyncClient() as client:
                skill = await HuggingFaceProvider().fetch_skill(HF_URL, client)
        assert route.called
        assert skill.install_name == "cool-space"
        assert skill.source_url == HF_URL


# ---------------------------------------------------------------------------
# Mintlify
# ---------------------------------------------------------------------------

MINTLIFY_URL = "https://docs.acme.dev/skill.md"


class TestMintlify:
    def test_identifier(self) -> None:
        assert MintlifyProvider().get_source_identifier(MINTLIFY_URL) == "mintlify/com"

    @pytest.mark.asyncio
    async def test_fetch_with_site_key(self) -> None:
        body = "---\nname: Acme\ndescription: Docs\nmetadata:\n  mintlify-proj: Acme Docs\n---\n"
        with respx.mock:
            respx.get(MINTLIFY_URL).mock(return_value=httpx.Response(200, text=body))
            async with httpx.AsyncClient() as client:
                skill = await MintlifyProvider().fetch_skill(MINTLIFY_URL, client)
        assert skill.install_name == "acme-docs"
        assert skill.metadata["mintlify-proj"] == "Acme Docs"

    @pytest.mark.asyncio
    async def test_missing_site_key_is_mismatch(self) -> None:
        with respx.mock:
            respx.get(MINTLIFY_URL).mock(return_value=httpx.Response(200, text=SKILL))
            async with httpx.AsyncClient() as client:
                with pytest.raises(ProviderMismatchError, match="mintlify-proj"):
                    await MintlifyProvider().fetch_skill(MINTLIFY_URL, client)

    @pytest.mark.asyncio
    async def test_unusable_site_key_is_mismatch(self) -> None:
        body = "---\nname: A\ndescription: B\nmetadata:\n  mintlify-proj: '!!!'\n---\n"
        with respx.mock:
            respx.get(MINTLIFY_URL).mock(return_value=httpx.Response(200, text=body))
            async with httpx.AsyncClient() as client:
                with pytest.raises(ProviderMismatchError):
                    await MintlifyProvider().fetch_skill(MINTLIFY_URL, client)


class TestBuildSkill:
    def test_direct_builds_from_content(self) -> None:
        skill = DirectProvider().build_skill("https://docs.example.com/guides/SKILL.md", SKILL)
        assert skill.name == "X"
        assert skill.install_name == "guides"

    def test_mintlify_declines_plain_document(self) -> None:
        with pytest.raises(ProviderMismatchError):
            MintlifyProvider().build_skill(MINTLIFY_URL, SKILL)
