"""Tests for the claims HTTP API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.testclient import TestClient

from claim_compiler.api.middleware.error_handler import register_error_handlers
from claim_compiler.api.routes import claims, health
from claim_compiler.core.config import AppSettings, EngineConfig
from claim_compiler.exceptions import ClaimCompilerError, SnapshotError
from claim_compiler.models import ClaimCompilerInput
from claim_compiler.readiness import READINESS_RULES, ReadinessEvaluator
from claim_compiler.services import ClaimCompiler


def _build_app(default_tier: str = "GENERIC", readiness: ReadinessEvaluator | None = None) -> FastAPI:
    """Minimal app with the claims router and a compiler built from explicit settings."""
    settings = AppSettings(engine=EngineConfig(default_payer_tier=default_tier))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        app.state.settings = settings
        app.state.compiler = ClaimCompiler(settings, readiness=readiness)
        yield

    app = FastAPI(lifespan=lifespan)
    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(claims.router, prefix="/api")
    return app


def _body(snapshot: ClaimCompilerInput) -> dict:
    return snapshot.model_dump(mode="json")


class TestHealth:
    def test_health_names_service(self) -> None:
        with TestClient(_build_app()) as client:
            assert client.get("/health").json() == {"status": "ok", "service": "claim-compiler"}

    def test_ready_reports_engine(self) -> None:
        with TestClient(_build_app(default_tier="STRICT")) as client:
            resp = client.get("/ready")
        assert resp.status_code == 200
        assert resp.json() == {
            "status": "ready",
            "default_payer_tier": "STRICT",
            "payer_tiers": ["GENERIC", "CONSERVATIVE", "STRICT"],
            "readiness_rules": len(READINESS_RULES),
        }

    def test_not_ready_before_startup(self) -> None:
        app = FastAPI()
        app.include_router(health.router)
        client = TestClient(app)
        assert client.get("/health").json()["status"] == "ok"
        resp = client.get("/ready")
        assert resp.status_code == 503
        assert resp.json() == {"status": "starting"}


class TestReadinessEndpoint:
    def test_complete(self, complete_snapshot: ClaimCompilerInput) -> None:
        with TestClient(_build_app()) as client:
            resp = client.post("/api/claims/readiness", json=_body(complete_snapshot))
        assert resp.status_code == 200
        assert resp.json()["percent"] == 100

    def test_root_canal(self, root_canal_snapshot: ClaimCompilerInput) -> None:
        with TestClient(_build_app()) as client:
            resp = client.post("/api/claims/readiness", json=_body(root_canal_snapshot))
        data = resp.json()
        assert data["status"] == "INCOMPLETE"
        assert data["fix_next"]["kind"] == "procedure_status"

    def test_invalid_body(self) -> None:
        with TestClient(_build_app()) as client:
            resp = client.post("/api/claims/readiness", json={"procedures": [{"id": "p"}]})
        assert resp.status_code == 422

    def test_uses_compiler_evaluator(self, root_canal_snapshot: ClaimCompilerInput) -> None:
        with TestClient(_build_app(readiness=ReadinessEvaluator(rules=()))) as client:
            resp = client.post("/api/claims/readiness", json=_body(root_canal_snapshot))
        data = resp.json()
        assert data["percent"] == 100
        assert data["items"] == []
        assert data["total_requirements"] == 0


class TestNarrativeEndpoint:
    def test_blocked(self, sedation_snapshot: ClaimCompilerInput) -> None:
        with TestClient(_build_app()) as client:
            resp = client.post("/api/claims/narrative", json=_body(sedation_snapshot))
        assert resp.status_code == 200
        data = resp.json()
        assert data["ok"] is False
        assert data["full_text"] is None
        assert data["missing_slots"][0]["module_id"] == "SEDATION_JUSTIFICATION"


class TestAcceptanceEndpoint:
    def test_strict_allowed(self, complete_snapshot: ClaimCompilerInput) -> None:
        with TestClient(_build_app()) as client:
            resp = client.post("/api/claims/acceptance", params={"tier": "STRICT"}, json=_body(complete_snapshot))
        assert resp.status_code == 200
        data = resp.json()
        assert data["allowed"] is True
        assert data["confidence_score"] == 100
        assert data["primary_procedure_id"] == "p2"

    def test_default_tier(self, complete_snapshot: ClaimCompilerInput) -> None:
        with TestClient(_build_app(default_tier="CONSERVATIVE")) as client:
            resp = client.post("/api/claims/acceptance", json=_body(complete_snapshot))
        assert resp.json()["payer_tier"] == "CONSERVATIVE"

    def test_unknown_tier_is_bad_request(self, complete_snapshot: ClaimCompilerInput) -> None:
        with TestClient(_build_app()) as client:
            resp = client.post("/api/claims/acceptance", params={"tier": "GOLD"}, json=_body(complete_snapshot))
        assert resp.status_code == 400
        assert resp.json()["type"] == "unknown_payer_tier"


class TestCompileEndpoint:
    def test_compile(self, complete_snapshot: ClaimCompilerInput) -> None:
        with TestClient(_build_app()) as client:
            resp = client.post("/api/claims/compile", params={"tier": "STRICT"}, json=_body(complete_snapshot))
        assert resp.status_code == 200
        data = resp.json()
        assert data["payer_tier"] == "STRICT"
        assert data["readiness"]["percent"] == 100
        assert data["narrative"]["ok"] is True
        assert data["acceptance"]["allowed"] is True


class TestProfilesEndpoint:
    def test_lists_profiles(self) -> None:
        with TestClient(_build_app()) as client:
            data = client.get("/api/claims/profiles").json()
        assert [p["id"] for p in data] == ["GENERIC", "CONSERVATIVE", "STRICT"]
        assert data[2]["min_confidence_for_submission"] == 95
        assert data[1]["required_evidence_types"] == ["pre_op_xray"]


class TestErrorHandlers:
    def test_domain_errors_map_to_status(self) -> None:
        app = _build_app()

        @app.get("/boom/snapshot")
        async def snapshot_boom() -> None:
            raise SnapshotError("bad snapshot")

        @app.get("/boom/generic")
        async def generic_boom() -> None:
            raise ClaimCompilerError("engine failure")

        with TestClient(app) as client:
            snapshot_resp = client.get("/boom/snapshot")
            generic_resp = client.get("/boom/generic")

        assert snapshot_resp.status_code == 422
        assert snapshot_resp.json() == {"error": "bad snapshot", "type": "snapshot_error"}
        assert generic_resp.status_code == 500
        assert generic_resp.json()["type"] == "claim_compiler_error"
