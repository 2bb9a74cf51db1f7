# pointnow_console/views/rewards.py
# SPDX-License-Identifier: Apache-2.0
"""
Reward catalogue and redemptions.

Tabs:
  • Catalogue    create, edit, activate/deactivate and delete rewards
  • Redemptions  the business's redemptions, with status changes
  • Reward detail one reward and every redemption of it

Redeeming for a customer at the counter happens on the Dashboard.
"""

from __future__ import annotations

import logging

import streamlit as st

from pointnow_console.api import file as file_api
from pointnow_console.api import redemptions, rewards
from pointnow_console.api.errors import ApiClientError
from pointnow_console.core.constants import REWARD_TYPE_LABELS
from pointnow_console.core.models import RedemptionStatus, RewardType
from pointnow_console.core.state import REWARDS_PAGE, reset_page_on_change
from pointnow_console.ui.components import data_of, pager, show_api_error
from pointnow_console.ui.keys import k

log = logging.getLogger(__name__)

PAGE = "rewards"
ACTIVE_FILTERS = {"All": None, "Active": "true", "Inactive": "false"}


def _upload_image(ctx: dict, upload) -> str | None:
    if upload is None:
        return None
    resp = file_api.upload(ctx["client"], upload.name, upload.getvalue(), upload.type or "image/png")
    return data_of(resp, "image_url")


def _create(ctx: dict) -> None:
    with st.expander("New reward"):
        with st.form(k(PAGE, "create"), clear_on_submit=True):
            name = st.text_input("Name")
            description = st.text_area("Description")
            cost = st.number_input("Points cost", min_value=1, step=1, value=100)
            reward_type = st.selectbox(
                "Type", [t.value for t in RewardType], format_func=REWARD_TYPE_LABELS.get
            )
            active = st.checkbox("Active", value=True)
            image = st.file_uploader("Image", type=["png", "jpg", "jpeg", "webp"])
            submitted = st.form_submit_button("Create reward")
        if not submitted:
            return
        if not name.strip():
            st.error("Please enter a reward name")
            return
        try:
            image_url = _upload_image(ctx, image)
            rewards.create(
                ctx["client"],
                ctx["business_id"],
                name.strip(),
                int(cost),
                description=description.strip() or None,
                type=reward_type,
                is_active=active,
                metadata={"image_url": image_url} if image_url else None,
            )
        except ApiClientError as e:
            show_api_error(e, ctx["store"], action="Could not create reward")
            return
        st.toast(f"Created {name.strip()}")


def _reward_row(ctx: dict, reward: dict) -> None:
    rid = reward["id"]
    with st.container(border=True):
        head, toggle_col, delete_col = st.columns([4, 1, 1])
        status = "active" if reward.get("is_active") else "inactive"
        head.markdown(
            f"**{reward.get('name')}** · {int(reward.get('points_cost') or 0):,} pts · "
            f"{REWARD_TYPE_LABELS.get(reward.get('type'), reward.get('type') or '—')} · {status}"
        )
        if reward.get("description"):
            head.caption(reward["description"])
        toggle_label = "Deactivate" if reward.get("is_active") else "Activate"
        if toggle_col.button(toggle_label, key=k(PAGE, f"toggle_{rid}")):
            try:
                rewards.update(ctx["client"], rid, is_active=not reward.get("is_active"))
            except ApiClientError as e:
                show_api_error(e, ctx["store"], action="Could not update reward")
                return
            st.rerun()
        if delete_col.button("Delete", key=k(PAGE, f"delete_{rid}")):
            try:
                rewards.delete(ctx["client"], rid)
            except ApiClientError as e:
                show_api_error(e, ctx["store"], action="Could not delete reward")
                return
            st.rerun()
        with st.popover("Edit"):
            with st.form(k(PAGE, f"edit_{rid}")):
                name = st.text_input("Name", value=reward.get("name") or "")
                description = st.text_area("Description", value=reward.get("description") or "")
                cost = st.number_input(
                    "Points cost", min_value=1, step=1, value=max(int(reward.get("points_cost") or 1), 1)
                )
                if st.form_submit_button("Save"):
                    try:
                        rewards.update(
                            ctx["client"],
                            rid,
                            name=name.strip() or None,
                            description=description.strip(),
                            points_cost=int(cost),
                        )
                    except ApiClientError as e:
                        show_api_error(e, ctx["store"], action="Could not save reward")
                        return
                    st.rerun()


def _catalogue(ctx: dict) -> None:
    _create(ctx)
    left, mid, right = st.columns(3)
    query = left.text_input("Search rewards", key=k(PAGE, "query")).strip() or None
    type_choice = mid.selectbox(
        "Type", ["All"] + [t.value for t in RewardType], key=k(PAGE, "type_filter")
    )
    active_choice = right.selectbox("Status", list(ACTIVE_FILTERS), key=k(PAGE, "active_filter"))
    reset_page_on_change(REWARDS_PAGE, k(PAGE, "last_filters"), (query, type_choice, active_choice))
    try:
        resp = rewards.get_by_business(
            ctx["client"],
            ctx["business_id"],
            type=None if type_choice == "All" else type_choice,
            is_active=ACTIVE_FILTERS[active_choice],
            page=st.session_state[REWARDS_PAGE],
            limit=ctx["settings"].PAGE_LIMIT,
            query=query,
        )
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load rewards")
        return
    rows = data_of(resp, "point_rewards", [])
    if not rows:
        st.info("No rewards yet.")
    for reward in rows:
        _reward_row(ctx, reward)
    pager(PAGE, REWARDS_PAGE, data_of(resp, "metadata"))


def redemption_row(r: dict) -> dict:
    customer = r.get("customer") or {}
    reward = r.get("point_reward") or {}
    return {
        "Date": (r.get("created_at") or "")[:16].replace("T", " "),
        "Customer": customer.get("name") or "—",
        "Reward": reward.get("name") or r.get("point_reward_id", ""),
        "Points": r.get("points_deducted", reward.get("points_cost", "")),
        "Status": r.get("status", ""),
    }


def _redemptions(ctx: dict) -> None:
    status = st.selectbox(
        "Status", ["All"] + [s.value for s in RedemptionStatus], key=k(PAGE, "redemption_status")
    )
    try:
        resp = redemptions.get_by_business(
            ctx["client"],
            ctx["business_id"],
            status=None if status == "All" else status,
            with_customer_detail="true",
            with_reward_detail="true",
            limit=ctx["settings"].PAGE_LIMIT,
        )
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load redemptions")
        return
    rows = data_of(resp, "point_reward_redemptions", [])
    if not rows:
        st.info("No redemptions yet.")
        return
    for r in rows:
        row = redemption_row(r)
        info_col, action_col = st.columns([5, 2])
        info_col.write(" · ".join(str(v) for v in row.values() if v != ""))
        if r.get("status") == RedemptionStatus.PENDING.value:
            done, fail = action_col.columns(2)
            for col, new_status in ((done, RedemptionStatus.COMPLETED), (fail, RedemptionStatus.FAILED)):
                if col.button(new_status.value.title(), key=k(PAGE, f"{new_status.value}_{r['id']}")):
                    try:
                        redemptions.update(ctx["client"], r["id"], status=new_status)
                    except ApiClientError as e:
                        show_api_error(e, ctx["store"], action="Could not update redemption")
                        return
                    st.rerun()


def _detail(ctx: dict) -> None:
    reward_id = st.text_input("Reward id", key=k(PAGE, "detail_id")).strip()
    if not reward_id:
        st.caption("Paste a reward id to see its redemptions.")
        return
    try:
        reward = data_of(rewards.get_by_id(ctx["client"], reward_id), "point_reward", {})
        resp = redemptions.get_by_point_reward(
            ctx["client"], reward_id, with_customer_detail="true", limit=ctx["settings"].PAGE_LIMIT
        )
    except ApiClientError as e:
        show_api_error(e, ctx["store"])
        return
    st.subheader(reward.get("name", reward_id))
    st.caption(
        f"{int(reward.get('points_cost') or 0):,} pts · "
        f"{REWARD_TYPE_LABELS.get(reward.get('type'), '—')}"
    )
    rows = [redemption_row(r) for r in data_of(resp, "point_reward_redemptions", [])]
    if rows:
        st.dataframe(rows, hide_index=True, use_container_width=True)
    else:
        st.info("Not redeemed yet.")


def render(ctx: dict) -> None:
    st.header("Rewards")
    catalogue_tab, redemptions_tab, detail_tab = st.tabs(["Catalogue", "Redemptions", "Reward detail"])
    with catalogue_tab:
        _catalogue(ctx)
    with redemptions_tab:
        _redemptions(ctx)
    with detail_tab:
        _detail(ctx)
