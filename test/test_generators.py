import pytest

from gmp_lib.errors import InvalidArgument
from gmp_lib.generators.authenticate import generator_authenticate, generator_authenticate_legacy
from gmp_lib.generators.common import (
    build_filter_string,
    build_get_command_attributes,
    generator_get_all,
    generator_get_list,
    generator_get_page,
    merge_search_parameters,
)
from gmp_lib.generators.credential import generator_create_credential, generator_delete_credential
from gmp_lib.generators.port_list import (
    generator_create_port_list,
    generator_delete_port_list,
    generator_modify_port_list,
)
from gmp_lib.generators.registry import LIST_COMMANDS, list_command
from gmp_lib.generators.system import generator_get_version
from gmp_lib.generators.task import (
    generator_create_task,
    generator_delete_task,
    generator_get_report,
    generator_get_task_status,
    generator_modify_task,
    generator_task_action,
)
from gmp_lib.types import SearchParameters


def test_get_command_attributes_with_details_and_escaped_filter() -> None:
    params = SearchParameters(
        details=True,
        filter="name~foo & severity>7",
        rows=10,
        first=0,
        sort_field="name",
        sort_desc=True,
    )
    assert build_get_command_attributes(params) == (
        ' details="1" filter="name~foo &amp; severity&gt;7 first=0 rows=10 sort=-name"'
    )


def test_filter_string_fragment_order() -> None:
    params = SearchParameters(filter=" owner=me ", extra_filter="tag=x", first=5, sort_field="created")
    assert build_filter_string(params) == "owner=me tag=x first=5 sort=created"
    assert build_filter_string(SearchParameters()) is None
    assert build_filter_string(None) is None
    assert build_get_command_attributes(SearchParameters(details=False)) == ' details="0"'
    assert build_get_command_attributes(None) == ""


def test_query_text_is_appended_to_filter() -> None:
    merged = merge_search_parameters(SearchParameters(filter="rows=5", query_text=" web "))
    assert merged.filter == "rows=5 web"
    assert merged.query_text is None
    assert merge_search_parameters(SearchParameters(query_text="db")).filter == "db"

    xml, tag = generator_get_list("get_targets", search=SearchParameters(query_text="dmz", rows=20))
    assert xml == '<get_targets filter="dmz rows=20"/>'
    assert tag == "get_targets_response"


def test_bulk_and_page_commands() -> None:
    assert generator_get_all("get_users") == ('<get_users filter="rows=-1"/>', "get_users_response")
    assert generator_get_page("get_users", first=201, rows=200) == (
        '<get_users filter="first=201 rows=200"/>',
        "get_users_response",
    )
    assert generator_get_list("get_tasks") == ("<get_tasks/>", "get_tasks_response")


@pytest.mark.parametrize(("first", "rows"), [(0, 10), (1, 0), ("1", 10)])
def test_page_bounds_are_validated(first, rows) -> None:
    with pytest.raises(InvalidArgument):
        generator_get_page("get_users", first=first, rows=rows)


@pytest.mark.parametrize("name", ["", "get users", "1get", None, "<x>"])
def test_command_name_is_validated(name) -> None:
    with pytest.raises(InvalidArgument):
        generator_get_list(name)


def test_authenticate_forms_escape_values() -> None:
    xml, tag = generator_authenticate(username="a&b", password="p<w>")
    assert xml == (
        "<authenticate><credentials><username>a&amp;b</username>"
        "<password>p&lt;w&gt;</password></credentials></authenticate>"
    )
    assert tag == "authenticate_response"
    legacy, _ = generator_authenticate_legacy(username="u", password="p")
    assert legacy == "<authenticate><username>u</username><password>p</password></authenticate>"


def test_create_task_element_order() -> None:
    xml, tag = generator_create_task(
        name="new task",
        config_id="config-1",
        target_id="target-1",
        scanner_id="scanner-1",
        comment="created by test",
        alterable=True,
        schedule_id="sched-1",
        alert_ids=["alert-1", "alert-2"],
    )
    assert tag == "create_task_response"
    assert xml == (
        "<create_task><name>new task</name>"
        '<config id="config-1"/><target id="target-1"/>'
        "<comment>created by test</comment>"
        '<scanner id="scanner-1"/>'
        "<alterable>1</alterable>"
        '<schedule id="sched-1"/>'
        '<alert id="alert-1"/><alert id="alert-2"/>'
        "</create_task>"
    )


def test_create_task_requires_ids() -> None:
    with pytest.raises(InvalidArgument):
        generator_create_task(name="x", config_id="", target_id="t")


def test_modify_and_delete_task() -> None:
    xml, tag = generator_modify_task(task_id="t1", name="renamed", alterable=False)
    assert xml == '<modify_task task_id="t1"><name>renamed</name><alterable>0</alterable></modify_task>'
    assert tag == "modify_task_response"
    assert generator_delete_task(task_id="t1", ultimate=True) == (
        '<delete_task task_id="t1" ultimate="1"/>',
        "delete_task_response",
    )


@pytest.mark.parametrize("action", ["start_task", "stop_task", "pause_task", "resume_task"])
def test_task_actions(action: str) -> None:
    assert generator_task_action(action, task_id="t&1") == (
        f'<{action} task_id="t&amp;1"/>',
        f"{action}_response",
    )


def test_unknown_task_action_is_rejected() -> None:
    with pytest.raises(InvalidArgument):
        generator_task_action("delete_task", task_id="t1")


def test_task_status_and_report() -> None:
    assert generator_get_task_status(task_id="t1") == ('<get_tasks task_id="t1" details="1"/>', "get_tasks_response")
    assert generator_get_report(report_id="r1") == ('<get_reports report_id="r1" details="1"/>', "get_reports_response")
    xml, _ = generator_get_report(report_id="r1", format_id="fmt", details=False)
    assert xml == '<get_reports report_id="r1" details="0" format_id="fmt"/>'


def test_port_list_commands() -> None:
    xml, tag = generator_create_port_list(name="web", port_range="T:80,T:443", comment="http")
    assert xml == "<create_port_list><name>web</name><port_range>T:80,T:443</port_range><comment>http</comment></create_port_list>"
    assert tag == "create_port_list_response"
    assert generator_modify_port_list(port_list_id="pl1", comment="c")[0] == (
        '<modify_port_list port_list_id="pl1"><comment>c</comment></modify_port_list>'
    )
    assert generator_delete_port_list(port_list_id="pl1")[0] == '<delete_port_list port_list_id="pl1" ultimate="0"/>'


def test_credential_commands() -> None:
    xml, tag = generator_create_credential(name="ssh", login="root", password="pw&", allow_insecure=False)
    assert xml == (
        "<create_credential><name>ssh</name><login>root</login>"
        "<password>pw&amp;</password><allow_insecure>0</allow_insecure></create_credential>"
    )
    assert tag == "create_credential_response"
    assert generator_delete_credential(credential_id="c1")[0] == '<delete_credential credential_id="c1" ultimate="0"/>'
    with pytest.raises(InvalidArgument):
        generator_create_credential(name="ssh", login="root", password=None)  # type: ignore[arg-type]


def test_get_version() -> None:
    assert generator_get_version() == ("<get_version/>", "get_version_response")


def test_list_registry_covers_every_kind() -> None:
    assert set(LIST_COMMANDS) == {
        "users",
        "tasks",
        "port_lists",
        "credentials",
        "targets",
        "configs",
        "scanners",
        "schedules",
        "report_formats",
        "alerts",
    }
    spec = list_command("report_formats")
    assert spec.command_name == "get_report_formats"
    assert spec.entity_name == "report_format"
    assert spec.response_tag == "get_report_formats_response"
    with pytest.raises(InvalidArgument):
        list_command("reports")
