"""Tests for the GCP Compute Engine client."""

from unittest.mock import patch, MagicMock
import logging

import pytest

from google.api_core import exceptions as gcp_exceptions
from google.auth.exceptions import DefaultCredentialsError, RefreshError
from google.cloud import compute_v1

from cloudquery.base.config import ComputeConfig
from cloudquery.base.emitter import Emitter
from cloudquery.base.exceptions import (
    EmitterError,
    RemoteCallError,
    SerializationError,
    SessionError,
    UnsupportedOperationError,
)
from cloudquery.base.query import Query
from cloudquery.gcp.compute import Compute


def _query(target: str) -> Query:
    return Query(
        resource="compute", action="get", project="my-project",
        zone="us-central1-a", namespace="default", target=target,
    )


@pytest.fixture
def svc():
    with (
        patch("cloudquery.gcp.compute.compute_v1.RegionsClient") as MockRegions,
        patch("cloudquery.gcp.compute.compute_v1.InstancesClient") as MockInstances,
    ):
        instance = Compute(ComputeConfig(project="my-project", zone="us-central1-a"))
        yield instance, MockRegions.return_value, MockInstances.return_value


# --- regions.list ---

class TestRegionsList:
    def test_success(self, svc, fragments):
        inst, regions, instances = svc
        regions.list.return_value = [
            compute_v1.Region(name="us-central1"),
            compute_v1.Region(name="europe-west1"),
        ]
        text = inst.do(_query("regions.list"))
        regions.list.assert_called_once_with(project="my-project")
        assert [d["name"] for d in fragments(text)] == ["us-central1", "europe-west1"]

    def test_empty(self, svc):
        inst, regions, instances = svc
        regions.list.return_value = []
        assert inst.do(_query("regions.list")) == ""

    def test_api_error(self, svc):
        inst, regions, instances = svc
        regions.list.side_effect = gcp_exceptions.Forbidden("denied")
        with pytest.raises(RemoteCallError, match="failed to list regions") as exc_info:
            inst.do(_query("regions.list"))
        assert isinstance(exc_info.value.__cause__, gcp_exceptions.Forbidden)

    def test_error_on_later_page(self, svc):
        inst, regions, instances = svc

        def pages():
            yield compute_v1.Region(name="us-central1")
            raise gcp_exceptions.ServiceUnavailable("page 2")

        regions.list.return_value = pages()
        with pytest.raises(RemoteCallError):
            inst.do(_query("regions.list"))

    def test_bad_item_aborts(self, svc):
        inst, regions, instances = svc
        regions.list.return_value = [compute_v1.Region(name="ok"), object()]
        with pytest.raises(SerializationError):
            inst.do(_query("regions.list"))

    def test_idempotent(self, svc):
        inst, regions, instances = svc
        regions.list.side_effect = lambda **kw: [compute_v1.Region(name="us-east1")]
        q = _query("regions.list")
        assert inst.do(q) == inst.do(q)


# --- instances.list ---

class TestInstancesList:
    def test_success(self, svc, fragments):
        inst, regions, instances = svc
        instances.list.return_value = [
            compute_v1.Instance(name="web-1", status="RUNNING"),
        ]
        text = inst.do(_query("instances.list"))
        instances.list.assert_called_once_with(project="my-project", zone="us-central1-a")
        docs = fragments(text)
        assert docs[0]["name"] == "web-1"
        assert docs[0]["status"] == "RUNNING"

    def test_api_error(self, svc):
        inst, regions, instances = svc
        instances.list.side_effect = gcp_exceptions.NotFound("no zone")
        with pytest.raises(RemoteCallError, match="failed to list instances"):
            inst.do(_query("instances.list"))

    def test_token_refresh_failure(self, svc):
        inst, regions, instances = svc
        instances.list.side_effect = RefreshError("token expired")
        with pytest.raises(RemoteCallError, match="failed to list instances: token expired"):
            inst.do(_query("instances.list"))


# --- routing / lifecycle ---

class TestRouting:
    def test_unknown_target(self, svc):
        inst, regions, instances = svc
        with pytest.raises(UnsupportedOperationError):
            inst.do(_query("disks.list"))

    def test_other_resource(self, svc):
        inst, regions, instances = svc
        q = Query(resource="network", action="get", target="networks.list")
        with pytest.raises(UnsupportedOperationError):
            inst.do(q)


class TestLifecycle:
    def test_emitter_called_after_success(self, svc):
        inst, regions, instances = svc
        inst.emitter = MagicMock(spec=Emitter)
        regions.list.return_value = []
        q = _query("regions.list")
        inst.do(q)
        inst.emitter.emit.assert_called_once_with(q)

    def test_emitter_not_called_on_failure(self, svc):
        inst, regions, instances = svc
        inst.emitter = MagicMock(spec=Emitter)
        regions.list.side_effect = gcp_exceptions.Forbidden("denied")
        with pytest.raises(RemoteCallError):
            inst.do(_query("regions.list"))
        inst.emitter.emit.assert_not_called()

    def test_emitter_failure_keeps_payload(self, svc, fragments):
        inst, regions, instances = svc
        inst.emitter = MagicMock(spec=Emitter)
        inst.emitter.emit.side_effect = EmitterError("gateway down")
        regions.list.return_value = [compute_v1.Region(name="us-central1")]
        text = inst.do(_query("regions.list"))
        assert fragments(text)[0]["name"] == "us-central1"

    def test_records_share_request_id(self, svc, caplog):
        inst, regions, instances = svc
        inst.emitter = MagicMock(spec=Emitter)
        inst.emitter.emit.side_effect = EmitterError("gateway down")
        regions.list.return_value = []
        with caplog.at_level(logging.INFO, logger="cloudquery"):
            inst.do(_query("regions.list"), request_id="req-1")
        assert len(caplog.records) == 2
        assert {r.request_id for r in caplog.records} == {"req-1"}

    def test_close_releases_transports(self, svc):
        inst, regions, instances = svc
        with inst:
            pass
        regions.transport.close.assert_called_once()
        instances.transport.close.assert_called_once()
        assert inst.session is None

    def test_session_error(self):
        with patch(
            "cloudquery.gcp.compute.compute_v1.RegionsClient",
            side_effect=DefaultCredentialsError("no ADC"),
        ):
            with pytest.raises(SessionError, match="Compute"):
                Compute(ComputeConfig(project="my-project", region="us-central1"))
