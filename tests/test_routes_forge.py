"""Tests for /forge, /manifest.json and /shell endpoints."""

from __future__ import annotations

import logging
import math
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import api.deps
from api.deps import get_asset_cache, get_shell_fetch, install_shell
from api.main import app
from infrastructure import metrics as metrics_module
from infrastructure.asset_cache import AssetCache

client = TestClient(app)


@pytest.fixture()
def fresh_cache() -> AssetCache:
    return AssetCache()


@pytest.fixture(autouse=True)
def _setup_and_teardown(fresh_cache: AssetCache):  # type: ignore[no-untyped-def]
    app.dependency_overrides.clear()
    app.dependency_overrides[get_asset_cache] = lambda: fresh_cache
    yield
    app.dependency_overrides.clear()


class TestHealthAndMetrics:
    def test_health(self) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_metrics_exposes_forge_counters(self) -> None:
        client.post("/forge/retention", json={"content_type": "image", "steps": 1})
        resp = client.get("/metrics")
        assert resp.status_code == 200
        assert "blockforge_forge_requests_total" in resp.text


class TestRetentionEndpoint:
    def test_returns_retention(self) -> None:
        resp = client.post("/forge/retention", json={"content_type": "image", "steps": 1})
        assert resp.status_code == 200
        data = resp.json()
        assert data["retention"] == pytest.approx(math.exp(-0.15))
        assert data["retention_percent"] == "86.1"

    def test_initial_info_scales(self) -> None:
        resp = client.post(
            "/forge/retention", json={"content_type": "text", "steps": 0, "initial_info": 0.4}
        )
        assert resp.json()["retention"] == pytest.approx(0.4)

    def test_unknown_content_type_is_422(self) -> None:
        resp = client.post("/forge/retention", json={"content_type": "hologram", "steps": 1})
        assert resp.status_code == 422

    def test_negative_steps_is_422(self) -> None:
        resp = client.post("/forge/retention", json={"content_type": "image", "steps": -1})
        assert resp.status_code == 422


class TestOptimalStepsEndpoint:
    def test_returns_continuous_steps(self) -> None:
        resp = client.post(
            "/forge/optimal-steps", json={"content_type": "image", "target_retention": 0.9}
        )
        assert resp.status_code == 200
        assert resp.json()["steps"] == pytest.approx(-math.log(0.9) / 0.15)

    def test_zero_target_is_422(self) -> None:
        resp = client.post(
            "/forge/optimal-steps", json={"content_type": "image", "target_retention": 0}
        )
        assert resp.status_code == 422


class TestCurveEndpoint:
    def test_default_curve(self) -> None:
        resp = client.get("/forge/curve/audio")
        assert resp.status_code == 200
        curve = resp.json()["curve"]
        assert len(curve) == 21
        assert curve[0]["retention_percent"] == "100.0"

    def test_max_steps_query(self) -> None:
        resp = client.get("/forge/curve/text?max_steps=5")
        assert [p["step"] for p in resp.json()["curve"]] == [0, 1, 2, 3, 4, 5]

    def test_unknown_type_is_422(self) -> None:
        assert client.get("/forge/curve/hologram").status_code == 422


class TestOptimizeEndpoint:
    def test_image_high(self) -> None:
        resp = client.post("/forge/optimize", json={"content_type": "image", "quality": "high"})
        assert resp.status_code == 200
        assert resp.json() == {
            "quantization_steps": 1,
            "expected_retention": 0.9,
            "decay_constant": 0.15,
            "quality": "high",
        }

    def test_quality_defaults_to_medium(self) -> None:
        resp = client.post("/forge/optimize", json={"content_type": "image"})
        assert resp.json()["expected_retention"] == 0.75

    def test_unknown_quality_is_422(self) -> None:
        resp = client.post("/forge/optimize", json={"content_type": "image", "quality": "ultra"})
        assert resp.status_code == 422


class TestPerceptualAndBricks:
    def test_perceptual(self) -> None:
        resp = client.post("/forge/perceptual", json={"retention": 1.0})
        assert resp.json()["perceptual_quality"] == 100

    def test_bricks_sculpture(self) -> None:
        resp = client.post("/forge/bricks", json={"width": 10, "height": 10, "depth": 5})
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_studs"] == 500
        assert data["estimated_bricks"] == 350
        assert data["type"] == "sculpture"

    def test_bricks_zero_width_is_422(self) -> None:
        resp = client.post("/forge/bricks", json={"width": 0, "height": 10})
        assert resp.status_code == 422


class TestValidateEndpoint:
    def test_acceptable(self) -> None:
        resp = client.post("/forge/validate", json={"content_type": "text", "retention": 0.6})
        data = resp.json()
        assert data["passes"] is True
        assert data["recommended"] is False
        assert data["message"] == "Quality acceptable but below recommended threshold"


class TestReportEndpoint:
    def test_full_report(self) -> None:
        resp = client.post(
            "/forge/report",
            json={"content_type": "image", "quality": "high", "width": 10, "height": 10},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["optimization"]["quantization_steps"] == 1
        assert data["retention"]["perceptual"] == 90
        assert data["bricks"]["estimated_bricks"] == 95
        assert len(data["decay_curve"]) == 21
        assert data["content_type"] == "image"
        assert "timestamp" in data

    def test_missing_dimensions_is_422(self) -> None:
        resp = client.post("/forge/report", json={"content_type": "image"})
        assert resp.status_code == 422


class TestShellEndpoints:
    def test_manifest(self) -> None:
        resp = client.get("/manifest.json")
        assert resp.status_code == 200
        assert resp.json()["short_name"] == "BlockForge"

    def test_assets_before_install(self) -> None:
        data = client.get("/shell/assets").json()
        assert data["cache_name"] == "blockforge-suite-v1"
        assert data["installed"] is False
        assert data["cached"] == 0
        assert "./index.html" in data["assets"]

    def test_assets_after_install(self, fresh_cache: AssetCache, shell_fetch) -> None:
        fresh_cache.install(shell_fetch)
        data = client.get("/shell/assets").json()
        assert data["installed"] is True
        assert data["cached"] == len(data["assets"])


class TestShellAssetRoute:
    @pytest.fixture(autouse=True)
    def _override_fetch(self, shell_fetch) -> None:  # type: ignore[no-untyped-def]
        app.dependency_overrides[get_shell_fetch] = lambda: shell_fetch

    def test_cached_asset_is_a_hit(self, fresh_cache: AssetCache, shell_fetch) -> None:
        fresh_cache.install(shell_fetch)
        hits = metrics_module.shell_cache_hits_total._value.get()
        resp = client.get("/shell/shared/styles.css")
        assert resp.status_code == 200
        assert resp.content == b"<!-- ./shared/styles.css -->"
        assert resp.headers["content-type"].startswith("text/css")
        assert metrics_module.shell_cache_hits_total._value.get() == hits + 1

    def test_root_serves_index(self, fresh_cache: AssetCache, shell_fetch) -> None:
        fresh_cache.install(shell_fetch)
        resp = client.get("/shell/")
        assert resp.status_code == 200
        assert resp.content == b"<!-- ./ -->"
        assert resp.headers["content-type"].startswith("text/html")

    def test_uncached_asset_falls_back_to_fetch(self) -> None:
        misses = metrics_module.shell_cache_misses_total._value.get()
        resp = client.get("/shell/index.html")
        assert resp.status_code == 200
        assert resp.content == b"<!-- ./index.html -->"
        assert metrics_module.shell_cache_misses_total._value.get() == misses + 1

    def test_unknown_asset_is_404(self) -> None:
        resp = client.get("/shell/studios/audio/index.html")
        assert resp.status_code == 404
        assert "./studios/audio/index.html" in resp.json()["detail"]

    def test_assets_listing_not_shadowed(self) -> None:
        assert "cache_name" in client.get("/shell/assets").json()


class TestShellInstallOnStartup:
    @pytest.fixture()
    def startup_cache(self, monkeypatch: pytest.MonkeyPatch) -> AssetCache:
        cache = AssetCache()
        monkeypatch.setattr(api.deps, "_asset_cache", cache)
        monkeypatch.delenv("BLOCKFORGE_SHELL_DIR", raising=False)
        app.dependency_overrides.clear()
        return cache

    def test_bundled_shell_is_installed(self, startup_cache: AssetCache) -> None:
        with TestClient(app) as started:
            data = started.get("/shell/assets").json()
            hits = metrics_module.shell_cache_hits_total._value.get()
            resp = started.get("/shell/manifest.json")
        assert data["installed"] is True
        assert startup_cache.is_installed
        assert resp.status_code == 200
        assert resp.json()["name"] == "BlockForge Suite"
        assert metrics_module.shell_cache_hits_total._value.get() == hits + 1

    def test_missing_shell_dir_does_not_block_startup(
        self,
        startup_cache: AssetCache,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        monkeypatch.setenv("BLOCKFORGE_SHELL_DIR", str(tmp_path))
        with TestClient(app) as started:
            assert started.get("/health").status_code == 200
            data = started.get("/shell/assets").json()
            assert started.get("/shell/index.html").status_code == 404
        assert data["installed"] is False
        assert data["cached"] == 0


class TestInstallShell:
    def test_returns_true_when_installed(self, fresh_cache: AssetCache, shell_fetch) -> None:
        assert install_shell(fresh_cache, shell_fetch) is True
        assert fresh_cache.is_installed

    def test_failure_is_logged_not_raised(
        self, fresh_cache: AssetCache, caplog: pytest.LogCaptureFixture
    ) -> None:
        def broken(path: str) -> bytes:
            raise FileNotFoundError(path)

        with caplog.at_level(logging.WARNING, logger="api.deps"):
            assert install_shell(fresh_cache, broken) is False
        assert "not installed" in caplog.text
        assert fresh_cache.size() == 0
