"""Unit tests for server schemas and the API envelope."""

import pytest
from pydantic import ValidationError

from provisioner.schemas.base import ApiResult
from provisioner.schemas.server import DeployRequest, ServerDetail, ServerSummary


class TestServerDetail:
    """Tests for ServerDetail parsing."""

    def test_accepts_camel_case_wire_keys(self) -> None:
        server = ServerDetail.model_validate({
            "id": "srv-1",
            "cpuModel": "EPYC",
            "gpuModel": "A40",
            "storageClass": "st1",
            "cost": {"hourOff": 0.02, "minutesOn": 3},
        })

        assert server.cpu_model == "EPYC"
        assert server.storage_class == "st1"
        assert server.cost.hour_off == 0.02
        assert server.cost.minutes_on == 3

    def test_accepts_snake_case_names(self) -> None:
        server = ServerDetail(id="srv-1", cpu_model="EPYC", gpu_count=4)

        assert server.gpu_count == 4

    def test_missing_fields_default_to_zero_values(self) -> None:
        server = ServerDetail(id="srv-1")

        assert server.ip == ""
        assert server.cost.charged == 0
        assert server.links == {}

    def test_id_is_required(self) -> None:
        with pytest.raises(ValidationError):
            ServerDetail.model_validate({"name": "no-id"})

    def test_is_immutable(self) -> None:
        server = ServerDetail(id="srv-1")

        with pytest.raises(ValidationError):
            server.name = "renamed"

    def test_integral_ram_stays_int(self) -> None:
        assert ServerDetail.model_validate({"id": "s", "ram": 16}).ram == 16
        assert ServerDetail.model_validate({"id": "s", "ram": 0.5}).ram == 0.5


class TestDeployRequest:
    """Tests for DeployRequest."""

    @pytest.fixture
    def request_fields(self) -> dict:
        return {
            "name": "gpu-box",
            "admin_user": "admin",
            "admin_pass": "secret",
            "instance_type": "gpu",
            "gpu_model": "A40",
            "gpu_count": 1,
            "vcpus": 1,
            "ram": 2,
            "storage": 20,
            "storage_class": "st1",
            "os": "Ubuntu 18.04 LTS",
            "location": "na-us-las-1",
        }

    def test_dumps_camel_case_aliases(self, request_fields) -> None:
        dumped = DeployRequest(**request_fields).model_dump(by_alias=True)

        assert dumped["adminUser"] == "admin"
        assert dumped["instanceType"] == "gpu"
        assert dumped["storageClass"] == "st1"
        assert dumped["vcpus"] == 1

    def test_password_hidden_from_repr(self, request_fields) -> None:
        assert "secret" not in repr(DeployRequest(**request_fields))

    def test_all_fields_required(self, request_fields) -> None:
        del request_fields["location"]

        with pytest.raises(ValidationError):
            DeployRequest(**request_fields)


class TestApiResult:
    """Tests for the response envelope."""

    def test_payload_defaults_to_none(self) -> None:
        result = ApiResult(success=False)

        assert result.payload is None

    def test_typed_payload(self) -> None:
        result = ApiResult[list[ServerSummary]].model_validate({
            "success": True,
            "payload": [{"id": "srv-1", "name": "one"}],
        })

        assert result.payload[0].name == "one"
