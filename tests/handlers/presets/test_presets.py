import json

import pytest
from pydantic import ValidationError

from core.index.system_settings import Presets, SystemSettingsStore
from handlers.presets.handler import handler
from handlers.presets.models import SavePresetsRequest
from handlers.presets.service import PresetsService


class TestPresetsModels:
    def test_to_presets(self) -> None:
        request = SavePresetsRequest.model_validate({"cameras": [" X100V ", "X100V"], "lenses": []})

        assert request.to_presets() == Presets(cameras=["X100V"], lenses=[])

    def test_both_lists_required(self) -> None:
        with pytest.raises(ValidationError):
            SavePresetsRequest.model_validate({"cameras": ["X100V"]})


class TestPresetsService:
    def test_round_trip(self, settings, memory_store) -> None:
        service = PresetsService(settings, store=SystemSettingsStore(memory_store))

        assert service.get_presets() == Presets()

        service.save_presets(Presets(cameras=["Q3"], lenses=["28mm"]))

        assert service.get_presets() == Presets(cameras=["Q3"], lenses=["28mm"])


class TestPresetsHandler:
    def test_get_before_any_save(self, aws_resources, lambda_context, json_event) -> None:
        response = handler(json_event("", method="GET", path="/presets"), lambda_context)

        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == {"cameras": [], "lenses": []}

    def test_save_then_get(self, aws_resources, lambda_context, auth_headers, json_event) -> None:
        save = handler(
            json_event(
                {"cameras": ["X100V", "Q3"], "lenses": ["23mm f/2"]},
                path="/presets",
                headers=auth_headers,
            ),
            lambda_context,
        )

        assert save["statusCode"] == 200
        assert json.loads(save["body"]) == {
            "success": True,
            "cameras": ["X100V", "Q3"],
            "lenses": ["23mm f/2"],
        }

        fetched = handler(json_event("", method="GET", path="/presets"), lambda_context)

        assert json.loads(fetched["body"]) == {"cameras": ["X100V", "Q3"], "lenses": ["23mm f/2"]}

    def test_save_requires_token(self, lambda_context, json_event) -> None:
        response = handler(json_event({"cameras": [], "lenses": []}, path="/presets"), lambda_context)

        assert response["statusCode"] == 401

    def test_save_invalid_body(self, lambda_context, auth_headers, json_event) -> None:
        response = handler(json_event({"cameras": "X100V"}, path="/presets", headers=auth_headers), lambda_context)

        assert response["statusCode"] == 400
