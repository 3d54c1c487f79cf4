# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Storyboard mesop UI page."""

import uuid

import mesop as me

from common.analytics import get_logger, log_page_view, track_click
from components.asset_uploader.asset_uploader import asset_uploader
from components.dialog import dialog, dialog_actions
from components.download_queue.download_queue import download_queue
from components.history_log.history_log import history_log
from components.scene_card.scene_card import parse_field_key, scene_card, scene_id_from_key
from config.default import Default
from config.messages import message
from models.storyboard import (
    DURATIONS,
    RESOLUTIONS,
    AddAsset,
    DeleteScene,
    EditScene,
    RemoveAsset,
    ResetSession,
    ScriptExported,
    SetDuration,
    SetPlot,
    SetResolution,
    SetSceneCount,
    SetStyle,
    StoryboardState,
    VideosExported,
    apply,
    find_scene,
)
from services import export_service, storyboard_service
from services.asset_service import asset_from_upload
from services.credentials import session_credentials
from services.generation_service import GeminiGenerationService
from state.state import AppState
from state.storyboard_state import PageState

config = Default()
logger = get_logger(__name__)

PAGE_NAME = "storyboard"
SECURITY_POLICY = me.SecurityPolicy(allowed_script_srcs=["https://cdn.jsdelivr.net"])


def on_storyboard_load(e: me.LoadEvent):
    """Starts the session's storyboard and syncs the credential flag."""
    app_state = me.state(AppState)
    state = me.state(PageState)
    if not app_state.session_id:
        app_state.session_id = str(uuid.uuid4())
    app_state.current_page = PAGE_NAME

    storyboard_service.sync_credential(state)
    log_page_view(PAGE_NAME, app_state.session_id)
    yield


@me.page(
    path="/",
    title="Storyboard Studio",
    on_load=on_storyboard_load,
    security_policy=SECURITY_POLICY,
)
def home_page():
    storyboard_content()


@me.page(
    path="/storyboard",
    title="Storyboard Studio",
    on_load=on_storyboard_load,
    security_policy=SECURITY_POLICY,
)
def storyboard_page():
    """Main Page."""
    storyboard_content()


def storyboard_content():
    state = me.state(PageState)
    storyboard = state.storyboard

    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="row",
            min_height="100vh",
            background=me.theme_var("surface-container-low"),
        )
    ):
        _sidebar(storyboard)
        _board(storyboard)

    _dialogs(state)


def _sidebar(storyboard: StoryboardState):
    with me.box(
        style=me.Style(
            background=me.theme_var("surface"),
            display="flex",
            flex_direction="column",
            gap=20,
            padding=me.Padding.all(24),
            width=380,
            flex_shrink=0,
            overflow_y="auto",
            height="100vh",
        )
    ):
        me.text(message("app_title"), type="headline-5", style=me.Style(font_weight="bold"))

        me.textarea(
            label=message("plot_label"),
            value=storyboard.plot,
            on_blur=on_blur_plot,
            rows=4,
            key="plot",
            style=me.Style(width="100%"),
        )
        me.textarea(
            label=message("style_label"),
            value=storyboard.style,
            on_blur=on_blur_style,
            rows=2,
            key="style",
            style=me.Style(width="100%"),
        )

        with me.box(style=me.Style(display="flex", gap=12)):
            me.select(
                label=message("resolution_label"),
                value=storyboard.resolution,
                options=[me.SelectOption(label=r, value=r) for r in RESOLUTIONS],
                on_selection_change=on_selection_change_resolution,
                style=me.Style(flex_grow=1),
            )
            me.select(
                label=message("duration_label"),
                value=str(storyboard.duration),
                options=[me.SelectOption(label=f"{d}s", value=str(d)) for d in DURATIONS],
                on_selection_change=on_selection_change_duration,
                style=me.Style(flex_grow=1),
            )

        with me.box(style=me.Style(display="flex", flex_direction="column")):
            me.text(
                f"{message('scene_count_label')}: {storyboard.scene_count}",
                style=me.Style(font_size=12, font_weight="bold"),
            )
            me.slider(
                min=config.MIN_SCENE_COUNT,
                max=config.MAX_SCENE_COUNT,
                step=1,
                value=storyboard.scene_count,
                on_value_change=on_scene_count_change,
                discrete=True,
            )

        asset_uploader(storyboard.assets, on_upload=on_upload_assets, on_remove=on_remove_asset)

        with me.box(style=me.Style(display="flex", align_items="center", gap=12)):
            me.button(
                message("generate_script"),
                on_click=on_click_generate_script,
                type="flat",
                disabled=storyboard.is_generating_text or not storyboard.plot.strip(),
            )
            if storyboard.is_generating_text:
                me.progress_spinner(diameter=24)

        history_log(storyboard.history)

        with me.box(style=me.Style(display="grid", grid_template_columns="1fr 1fr", gap=8)):
            me.button(
                message("export_videos"),
                on_click=on_click_export_videos,
                type="stroked",
                disabled=not any(scene.media.has_video for scene in storyboard.scenes),
            )
            me.button(
                message("export_script"),
                on_click=on_click_export_script,
                type="stroked",
                disabled=not storyboard.scenes,
            )
            me.button(
                message("generate_all"),
                on_click=on_click_generate_all,
                type="flat",
                disabled=not storyboard.scenes,
            )
            me.button(message("new_session"), on_click=on_click_new_session, type="stroked")


def _board(storyboard: StoryboardState):
    with me.box(style=me.Style(flex_grow=1, padding=me.Padding.all(32), overflow_y="auto", height="100vh")):
        if not storyboard.scenes:
            with me.box(
                style=me.Style(
                    display="flex",
                    align_items="center",
                    justify_content="center",
                    height="60vh",
                    border=me.Border.all(me.BorderSide(width=2, style="dashed", color=me.theme_var("outline-variant"))),
                    border_radius=32,
                )
            ):
                me.text(message("empty_board"), style=me.Style(color=me.theme_var("outline")))
            return

        with me.box(
            style=me.Style(
                display="grid",
                grid_template_columns="repeat(auto-fill, minmax(320px, 1fr))",
                gap=24,
            )
        ):
            for scene in storyboard.scenes:
                scene_card(
                    scene,
                    on_edit=on_blur_scene_field,
                    on_regenerate_text=on_click_regenerate_text,
                    on_generate_image=on_click_generate_image,
                    on_generate_video=on_click_generate_video,
                    on_delete=on_click_delete_scene,
                )


def _dialogs(state: PageState):
    pending = find_scene(state.storyboard, state.pending_delete_scene_id)
    with dialog(is_open=state.show_delete_dialog and pending is not None):  # pylint: disable=not-context-manager
        if pending is not None:
            me.text(message("confirm_delete", number=pending.scene_number))
        with dialog_actions():  # pylint: disable=not-context-manager
            me.button(message("cancel"), on_click=on_click_cancel_delete)
            me.button(message("confirm"), on_click=on_click_confirm_delete, type="flat")

    with dialog(is_open=state.show_bulk_dialog):  # pylint: disable=not-context-manager
        me.text(message("confirm_bulk", count=len(state.storyboard.scenes)))
        with dialog_actions():  # pylint: disable=not-context-manager
            me.button(message("cancel"), on_click=on_click_cancel_bulk)
            me.button(message("confirm"), on_click=on_click_confirm_bulk, type="flat")

    with dialog(is_open=state.show_credential_dialog, title=message("credential_title")):  # pylint: disable=not-context-manager
        me.text(message("credential_body"))
        me.input(
            label="GEMINI_API_KEY",
            type="password",
            value=state.credential_input,
            on_blur=on_blur_credential,
            key="credential_input",
            style=me.Style(width="100%"),
        )
        with dialog_actions():  # pylint: disable=not-context-manager
            me.button(message("close"), on_click=on_click_close_credential)
            me.button(message("credential_select"), on_click=on_click_select_credential, type="flat")

    with dialog(is_open=state.show_error_dialog, title=message("error_title"), on_close=on_close_error_dialog):  # pylint: disable=not-context-manager
        me.text(state.error_message)

    downloads = export_service.plan_from_json(state.export_plan_json)
    with dialog(is_open=state.show_export_dialog, title=message("export_title"), on_close=on_close_export_dialog):  # pylint: disable=not-context-manager
        for download in downloads:
            me.link(text=download.file_name, url=download.url, open_in_new_tab=True)
    download_queue(downloads_json=state.export_plan_json, run=state.export_run, key="download_queue")


def _dispatch(events):
    """Applies lifecycle events to the page, re-rendering after each one."""
    state = me.state(PageState)
    for event in events:
        storyboard_service.apply_event(state, event)
        yield


def _apply(command):
    state = me.state(PageState)
    state.storyboard = apply(state.storyboard, command)


def _alert(text: str):
    state = me.state(PageState)
    state.error_message = text
    state.show_error_dialog = True


def _current_storyboard() -> StoryboardState:
    return me.state(PageState).storyboard


def _service() -> GeminiGenerationService:
    return GeminiGenerationService(session_credentials(me.state(PageState)))


def on_blur_plot(e: me.InputBlurEvent):
    _apply(SetPlot(e.value))
    yield


def on_blur_style(e: me.InputBlurEvent):
    _apply(SetStyle(e.value))
    yield


def on_selection_change_resolution(e: me.SelectSelectionChangeEvent):
    _apply(SetResolution(e.value))
    yield


def on_selection_change_duration(e: me.SelectSelectionChangeEvent):
    _apply(SetDuration(int(e.value)))
    yield


def on_scene_count_change(e: me.SliderValueChangeEvent):
    _apply(SetSceneCount(int(e.value)))
    yield


def on_upload_assets(e: me.UploadEvent):
    """Adds every uploaded file as a product reference."""
    for uploaded in e.files:
        try:
            asset = asset_from_upload(uploaded.name, uploaded.mime_type, uploaded.getvalue())
        except ValueError as ex:
            logger.warning(f"Rejected upload {uploaded.name}: {ex}")
            _alert(str(ex))
            continue
        _apply(AddAsset(asset))
    yield


def on_remove_asset(e: me.ClickEvent):
    _apply(RemoveAsset(e.key))
    yield


def on_blur_scene_field(e: me.InputBlurEvent):
    scene_id, field_name = parse_field_key(e.key)
    _apply(EditScene(scene_id, field_name, e.value))
    yield


@track_click(element_id="storyboard_generate_script_button")
def on_click_generate_script(e: me.ClickEvent):  # pylint: disable=unused-argument
    yield from _dispatch(
        storyboard_service.generate_script(_current_storyboard(), _service())
    )


@track_click(element_id="storyboard_regenerate_text_button")
def on_click_regenerate_text(e: me.ClickEvent):
    yield from _dispatch(
        storyboard_service.regenerate_text(
            _current_storyboard(), scene_id_from_key(e.key), _service()
        )
    )


@track_click(element_id="storyboard_generate_image_button")
def on_click_generate_image(e: me.ClickEvent):
    yield from _dispatch(
        storyboard_service.generate_image(
            _current_storyboard(), scene_id_from_key(e.key), _service()
        )
    )


@track_click(element_id="storyboard_generate_video_button")
def on_click_generate_video(e: me.ClickEvent):
    yield from _dispatch(
        storyboard_service.generate_video(
            _current_storyboard(), scene_id_from_key(e.key), _service()
        )
    )


def on_click_delete_scene(e: me.ClickEvent):
    state = me.state(PageState)
    state.pending_delete_scene_id = scene_id_from_key(e.key)
    state.show_delete_dialog = True
    yield


@track_click(element_id="storyboard_confirm_delete_button")
def on_click_confirm_delete(e: me.ClickEvent):  # pylint: disable=unused-argument
    state = me.state(PageState)
    _apply(DeleteScene(state.pending_delete_scene_id))
    state.pending_delete_scene_id = ""
    state.show_delete_dialog = False
    yield


def on_click_cancel_delete(e: me.ClickEvent):  # pylint: disable=unused-argument
    state = me.state(PageState)
    state.pending_delete_scene_id = ""
    state.show_delete_dialog = False
    yield


def on_click_generate_all(e: me.ClickEvent):  # pylint: disable=unused-argument
    state = me.state(PageState)
    if state.storyboard.scenes:
        state.show_bulk_dialog = True
    yield


@track_click(element_id="storyboard_generate_all_button")
def on_click_confirm_bulk(e: me.ClickEvent):  # pylint: disable=unused-argument
    state = me.state(PageState)
    state.show_bulk_dialog = False
    yield
    yield from _dispatch(
        storyboard_service.generate_all_videos(_current_storyboard, _service())
    )


def on_click_cancel_bulk(e: me.ClickEvent):  # pylint: disable=unused-argument
    state = me.state(PageState)
    state.show_bulk_dialog = False
    yield


@track_click(element_id="storyboard_export_videos_button")
def on_click_export_videos(e: me.ClickEvent):  # pylint: disable=unused-argument
    state = me.state(PageState)
    plan = export_service.build_video_export_plan(state.storyboard.scenes)
    if not plan:
        _alert(message("alert_no_videos"))
        yield
        return
    _apply(VideosExported(len(plan)))
    state.export_plan_json = export_service.plan_to_json(plan)
    state.export_run += 1
    state.show_export_dialog = True
    yield


@track_click(element_id="storyboard_export_script_button")
def on_click_export_script(e: me.ClickEvent):  # pylint: disable=unused-argument
    state = me.state(PageState)
    storyboard = state.storyboard
    download = export_service.export_script(storyboard.plot, storyboard.style, storyboard.scenes)
    _apply(ScriptExported())
    state.export_plan_json = export_service.plan_to_json([download])
    state.export_run += 1
    state.show_export_dialog = True
    yield


def on_close_export_dialog(e: me.ClickEvent):  # pylint: disable=unused-argument
    state = me.state(PageState)
    state.show_export_dialog = False
    yield


@track_click(element_id="storyboard_new_session_button")
def on_click_new_session(e: me.ClickEvent):  # pylint: disable=unused-argument
    _apply(ResetSession())
    yield


def on_blur_credential(e: me.InputBlurEvent):
    state = me.state(PageState)
    state.credential_input = e.value
    yield


@track_click(element_id="storyboard_select_credential_button")
def on_click_select_credential(e: me.ClickEvent):  # pylint: disable=unused-argument
    state = me.state(PageState)
    storyboard_service.select_credential(state, state.credential_input)
    state.credential_input = ""
    yield


def on_click_close_credential(e: me.ClickEvent):  # pylint: disable=unused-argument
    state = me.state(PageState)
    state.show_credential_dialog = False
    yield


def on_close_error_dialog(e: me.ClickEvent):  # pylint: disable=unused-argument
    """Handler to close the error dialog."""
    state = me.state(PageState)
    state.show_error_dialog = False
    yield
