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
"""User-facing message catalogs for the storyboard (history log, alerts, labels)."""

from config.default import Default

config = Default()

FIELD_LABELS = {
    "en": {
        "description": "description",
        "camera_angle": "camera angle",
        "lighting": "lighting",
        "product_action": "product action",
    },
    "zh": {
        "description": "画面描述",
        "camera_angle": "镜头构图",
        "lighting": "灯光氛围",
        "product_action": "产品动态",
    },
}

MESSAGES = {
    "en": {
        # Prompt language
        "language_name": "English",
        # History log
        "session_started": "New storyboard session started",
        "plot_updated": "Plot outline updated",
        "style_updated": "Camera style directive updated",
        "scene_count_set": "Scene count set to {count}",
        "resolution_set": "Video resolution set to {resolution}",
        "duration_set": "Video duration set to {duration}s",
        "script_started": "Generating script: {preview}...",
        "script_generated": "Script generated ({count} scenes)",
        "script_failed": "Script generation failed",
        "scene_edited": "Edited {field} of scene {number}",
        "text_started": "Redesigning the script of scene {number}",
        "text_done": "Scene {number} script updated",
        "text_failed": "Scene {number} script update failed",
        "image_started": "Rendering still frame for scene {number}",
        "image_done": "Scene {number} still frame rendered",
        "image_failed": "Scene {number} still frame failed",
        "video_started": "Rendering video for scene {number} (this takes a while)",
        "video_done": "Scene {number} video rendered",
        "video_failed": "Scene {number} video failed",
        "scene_deleted": "Deleted scene {number}",
        "asset_added": "Added product reference: {name}",
        "asset_removed": "Removed a product reference",
        "credential_selected": "API key selected",
        "videos_exported": "Exporting {count} videos...",
        "script_exported": "Exported the storyboard script",
        # Alerts
        "alert_script_failed": "Script generation failed.",
        "alert_image_failed": "Still frame generation failed.",
        "alert_video_failed": "Video generation failed.",
        "alert_authorization": "The API key is invalid or has expired. Please select a key from a paid project.",
        "alert_no_videos": "No videos have been generated yet.",
        # Dialogs
        "confirm_delete": "Delete scene {number}?",
        "confirm_bulk": "About to generate {count} videos. This can take a long time. Continue?",
        "credential_title": "Paid API key required",
        "credential_body": "Veo video generation needs a valid API key.",
        "credential_select": "Use this API key",
        "error_title": "Generation Error",
        "export_title": "Export",
        # Labels
        "app_title": "Storyboard Studio",
        "plot_label": "Plot outline",
        "style_label": "Camera style directive",
        "resolution_label": "Video resolution",
        "duration_label": "Video duration",
        "scene_count_label": "Scene count",
        "generate_script": "Generate script",
        "assets_label": "Product references (images/videos)",
        "add_assets": "Add files",
        "history_label": "History",
        "history_empty": "No activity yet",
        "export_videos": "Export videos",
        "export_script": "Export script",
        "generate_all": "Generate all videos",
        "new_session": "New storyboard",
        "empty_board": "Upload product references and describe your plot to get started.",
        "regenerate_text": "Redesign",
        "generate_image": "Generate frame",
        "update_image": "Update frame",
        "generate_video": "Render video",
        "rerender_video": "Re-render video",
        "rendering_video": "Rendering video",
        "rendering_image": "Generating preview",
        "rewriting_text": "Rewriting scene text",
        "no_media": "No media yet",
        "confirm": "Confirm",
        "cancel": "Cancel",
        "close": "Close",
        "scene_heading": "Scene {number}",
    },
    "zh": {
        "language_name": "Simplified Chinese",
        "session_started": "新建分镜会话",
        "plot_updated": "已更新剧情大纲",
        "style_updated": "已更新镜头风格指令",
        "scene_count_set": "分镜数量设为 {count}",
        "resolution_set": "视频分辨率设为 {resolution}",
        "duration_set": "视频时长设为 {duration} 秒",
        "script_started": "开始生成脚本：{preview}...",
        "script_generated": "脚本生成成功（共 {count} 个分镜）",
        "script_failed": "脚本生成失败",
        "scene_edited": "已编辑第 {number} 场的{field}",
        "text_started": "重新设计第 {number} 场脚本",
        "text_done": "第 {number} 场脚本已更新",
        "text_failed": "第 {number} 场脚本更新失败",
        "image_started": "生成第 {number} 场静态分镜",
        "image_done": "第 {number} 场静态分镜渲染完成",
        "image_failed": "第 {number} 场静态分镜生成失败",
        "video_started": "开始渲染第 {number} 场视频 (耗时较长)",
        "video_done": "第 {number} 场视频生成完成",
        "video_failed": "第 {number} 场视频生成失败",
        "scene_deleted": "已删除第 {number} 场分镜",
        "asset_added": "已添加产品参考：{name}",
        "asset_removed": "移除了一项产品参考资源",
        "credential_selected": "已选择 API Key",
        "videos_exported": "正在导出 {count} 个视频...",
        "script_exported": "已导出分镜脚本",
        "alert_script_failed": "脚本生成失败。",
        "alert_image_failed": "画面生成失败。",
        "alert_video_failed": "视频生成失败。",
        "alert_authorization": "API Key 无效或已过期，请重新选择付费项目 Key。",
        "alert_no_videos": "尚未生成任何视频。",
        "confirm_delete": "确定删除第 {number} 场分镜吗？",
        "confirm_bulk": "即将生成 {count} 个视频，这可能需要较长时间，确定继续吗？",
        "credential_title": "需要付费 API Key",
        "credential_body": "使用 Veo 视频生成功能需要有效的 API Key。",
        "credential_select": "使用此 API Key",
        "error_title": "生成错误",
        "export_title": "导出",
        "app_title": "分镜大师 AI",
        "plot_label": "剧情大纲",
        "style_label": "镜头风格指令",
        "resolution_label": "视频分辨率",
        "duration_label": "视频时长",
        "scene_count_label": "分镜数量",
        "generate_script": "生成脚本",
        "assets_label": "产品参考 (图片/视频)",
        "add_assets": "添加文件",
        "history_label": "操作历史记录",
        "history_empty": "暂无记录",
        "export_videos": "导出视频",
        "export_script": "导出脚本",
        "generate_all": "一键生成",
        "new_session": "新建分镜",
        "empty_board": "请在左侧侧边栏上传产品参考并输入您的剧情构想。",
        "regenerate_text": "AI 润色",
        "generate_image": "生成图",
        "update_image": "更新图",
        "generate_video": "渲染视频",
        "rerender_video": "重新渲染视频",
        "rendering_video": "正在渲染视频",
        "rendering_image": "生成预览图",
        "rewriting_text": "正在重写分镜文本",
        "no_media": "暂无媒体预览",
        "confirm": "确定",
        "cancel": "取消",
        "close": "关闭",
        "scene_heading": "第 {number} 场",
    },
}

DEFAULT_LOCALE = "en"


def message(key: str, locale: str | None = None, **kwargs) -> str:
    """Looks up a message in the active locale, falling back to English."""
    catalog = MESSAGES.get(locale or config.UI_LOCALE, MESSAGES[DEFAULT_LOCALE])
    template = catalog.get(key) or MESSAGES[DEFAULT_LOCALE][key]
    return template.format(**kwargs)


def field_label(field_name: str, locale: str | None = None) -> str:
    labels = FIELD_LABELS.get(locale or config.UI_LOCALE, FIELD_LABELS[DEFAULT_LOCALE])
    return labels[field_name]
