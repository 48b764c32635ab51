"""HTTP entrypoint for the player demand dashboard."""

from __future__ import annotations

import hmac
import logging
import os
from dataclasses import replace
from typing import Any, Callable, Dict, List

from flask import Flask, jsonify, request

from player_demand.core.config import ConfigError, InvalidConfiguration, Settings, get_settings, parse_bool
from player_demand.core.cost_guard import CostLimitExceeded, RealMoneyDisabled
from player_demand.core.storage import ResultStore
from player_demand.jobs import collect
from player_demand.vendors.dataforseo import DataForSEOClient, ProviderError, build_client, build_labs_client

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)

# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; reads settings only, never calls the provider."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "worker_port_config": settings.worker_port,
                "api_mode": "Sandbox" if settings.use_sandbox else "Live",
                "allow_real_money": settings.allow_real_money,
            }
        ),
        200,
    )


@app.post("/api/dataforseo")
def dataforseo_action() -> Any:
    """
    Run one dashboard action.
    Required JSON field: action
    Optional (per action): keywords, locationCode, languageCode, playerName,
    locationCodes, dateFrom, dateTo, useSandbox
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    action = payload.get("action")

    handler = _ACTIONS.get(action)
    if handler is None:
        return jsonify({"error": f"invalid action; valid actions: {', '.join(_ACTIONS)}"}), 400

    logger.info("Dashboard action requested: %s", action)
    try:
        data = handler(payload)
    except (InvalidConfiguration, ConfigError) as exc:
        return jsonify({"error": str(exc)}), 400
    except CostLimitExceeded as exc:
        return jsonify({"error": str(exc)}), 402
    except RealMoneyDisabled as exc:
        return jsonify({"error": str(exc)}), 403
    except ProviderError as exc:
        logger.error("Provider call failed for %s: %s", action, exc)
        return jsonify({"error": str(exc)}), 502

    return jsonify({"success": True, "data": data}), 200


@app.get("/api/stored-data")
def stored_data() -> Any:
    store = _store()
    run_id = request.args.get("id")
    if run_id:
        run = store.get(run_id)
        if run is None:
            return jsonify({"error": "Data not found"}), 404
        return jsonify({"success": True, "data": run.to_dict()}), 200

    runs = store.list_all()
    return jsonify({"success": True, "data": [run.to_dict() for run in runs], "count": len(runs)}), 200


@app.get("/api/players")
def players() -> Any:
    profiles = collect.dashboard_profiles(_store(), get_settings())
    if not profiles:
        return jsonify({"success": False, "data": [], "message": "No stored runs yet"}), 200
    return jsonify({"success": True, "data": profiles, "count": len(profiles)}), 200


@app.post("/api/auth")
def auth() -> Any:
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    password = str(payload.get("password") or "")
    expected = get_settings().dashboard_password

    if expected and password and hmac.compare_digest(password, expected):
        return jsonify({"success": True}), 200
    logger.warning("Rejected dashboard login attempt")
    return jsonify({"success": False, "error": "Invalid password"}), 401


# ---------- Internals ----------


def _store() -> ResultStore:
    return ResultStore(get_settings().data_dir)


def _settings_for(use_sandbox: Any = None) -> Settings:
    settings = get_settings()
    if use_sandbox is not None:
        settings = replace(settings, use_sandbox=parse_bool(use_sandbox))
    return settings


def _provider(use_sandbox: Any = None) -> DataForSEOClient:
    return build_client(_settings_for(use_sandbox))


def _labs_provider(use_sandbox: Any = None) -> DataForSEOClient:
    return build_labs_client(_settings_for(use_sandbox))


def _int_param(payload: Dict[str, Any], name: str, default: int) -> int:
    raw = payload.get(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration(f"{name} must be numeric") from exc


def _list_param(payload: Dict[str, Any], name: str) -> List[Any]:
    raw = payload.get(name)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise InvalidConfiguration(f"{name} must be a list")
    return raw


def _search_volume(payload: Dict[str, Any]) -> Any:
    records = collect.search_volume(
        [str(keyword) for keyword in _list_param(payload, "keywords")],
        provider=_provider(payload.get("useSandbox")),
        location_code=_int_param(payload, "locationCode", 2840),
        language_code=str(payload.get("languageCode") or get_settings().language_code),
    )
    return [record.to_dict() for record in records]


def _player_data(payload: Dict[str, Any]) -> Any:
    codes = _list_param(payload, "locationCodes") or [2840]
    try:
        location_codes = [int(code) for code in codes]
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration("locationCodes must be numeric") from exc
    return collect.player_data(
        str(payload.get("playerName") or ""),
        provider=_provider(payload.get("useSandbox")),
        location_codes=location_codes,
        settings=get_settings(),
    )


def _test_connection(payload: Dict[str, Any]) -> Any:
    provider = _provider(payload.get("useSandbox"))
    records = collect.test_connection(provider)
    return {"connected": True, "apiMode": provider.api_mode, "results": [record.to_dict() for record in records]}


def _pipeline_action(runner: Callable[..., Any], *, labs: bool = False) -> Callable[[Dict[str, Any]], Any]:
    def handler(payload: Dict[str, Any]) -> Any:
        factory = _labs_provider if labs else _provider
        result = runner(
            provider=factory(payload.get("useSandbox")),
            store=_store(),
            settings=get_settings(),
            date_from=payload.get("dateFrom"),
            date_to=payload.get("dateTo"),
        )
        return result if isinstance(result, dict) else result.to_dict()

    return handler


_ACTIONS: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    "search_volume": _search_volume,
    "player_data": _player_data,
    "test_connection": _test_connection,
    "run_micro_test": _pipeline_action(collect.run_micro_test),
    "run_full_production_test": _pipeline_action(collect.run_full_production_test),
    "collect_all_data": _pipeline_action(collect.collect_all_data),
    "run_labs_micro_test": _pipeline_action(collect.run_labs_micro_test, labs=True),
    "run_labs_full_production_test": _pipeline_action(collect.run_labs_full_production_test, labs=True),
}


def main() -> None:
    env_port = os.getenv("PORT")
    port = int(env_port or get_settings().worker_port)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
