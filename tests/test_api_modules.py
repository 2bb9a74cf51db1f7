# tests/test_api_modules.py
# SPDX-License-Identifier: Apache-2.0
"""Path, query and body construction for the resource modules."""

import pytest

from pointnow_console.api import (
    auth,
    blast,
    branches,
    business,
    config_types,
    customers,
    file,
    payment,
    redemptions,
    rewards,
    staff,
    subscription,
    transactions,
    users,
    wallet,
)
from pointnow_console.core.models import RedemptionStatus, RewardType


class TestAuth:
    def test_login(self, recorder):
        auth.login(recorder, "a@b.co", "pw")
        assert recorder.last["endpoint"] == "/auth/login"
        assert recorder.last["data"] == {"email": "a@b.co", "password": "pw"}

    def test_register_user_defaults_to_user_role(self, recorder):
        auth.register_user(recorder, "a@b.co", "pw", "+6012")
        assert recorder.last["data"] == {
            "email": "a@b.co",
            "password": "pw",
            "phone_number": "+6012",
            "role": "USER",
        }

    def test_phone_registration_is_customer(self, recorder):
        auth.register_user_with_phone(recorder, "a@b.co", "+6012")
        assert recorder.last["endpoint"] == "/auth/register/phone_number"
        assert recorder.last["data"]["role"] == "CUSTOMER"

    def test_otp_endpoints(self, recorder):
        auth.verify_login_otp(recorder, "123456")
        auth.verify_register_otp(recorder, "654321")
        assert [c["endpoint"] for c in recorder.calls] == [
            "/auth/verify/login/phone_number/otp",
            "/auth/verify/register/phone_number/otp",
        ]
        assert recorder.calls[1]["data"] == {"otp_code": "654321"}

    def test_reset_password(self, recorder):
        auth.reset_password(recorder, "tok", "Str0ng!pw")
        assert recorder.last["data"] == {"token": "tok", "password": "Str0ng!pw"}


class TestCustomers:
    def test_leaderboard_omits_unset_dates(self, recorder):
        customers.get_leaderboard(recorder, "biz-1", page=2, limit=50)
        assert recorder.last["endpoint"] == "/customers/leaderboard?business_id=biz-1&page=2&limit=50"

    def test_position(self, recorder):
        customers.get_position(recorder, "biz-1", "c-9", start_date="2024-01-01", end_date="2024-01-31")
        assert recorder.last["endpoint"] == (
            "/customers/leaderboard/position?business_id=biz-1&customer_id=c-9"
            "&start_date=2024-01-01&end_date=2024-01-31"
        )

    def test_search_carries_cancel_token(self, recorder):
        token = object()
        customers.search(recorder, "ain", "biz-1", cancel_token=token)
        assert recorder.last["endpoint"] == "/customers/search?query=ain&business_id=biz-1"
        assert recorder.last["cancel_token"] is token

    def test_update_by_business(self, recorder):
        customers.update_by_business(recorder, "c-1", "biz-1", {"name": "Aina"})
        assert recorder.last["method"] == "PATCH"
        assert recorder.last["endpoint"] == "/customers/c-1/business/biz-1"

    def test_batch(self, recorder):
        customers.create_with_user_batch(recorder, [{"name": "A"}])
        assert recorder.last["data"] == {"customers": [{"name": "A"}]}


class TestRewards:
    def test_filters_and_name_query(self, recorder):
        rewards.get_by_business(
            recorder, "biz-1", type=RewardType.VOUCHER, is_active="true", page=1, limit=10, query="kopi"
        )
        assert recorder.last["endpoint"] == (
            "/point_rewards/business/biz-1?type=VOUCHER&is_active=true&page=1&limit=10&name=kopi"
        )

    @pytest.mark.parametrize("flag", [True, False, "yes", 1])
    def test_is_active_must_be_a_string_flag(self, recorder, flag):
        with pytest.raises(ValueError):
            rewards.get_all(recorder, is_active=flag)
        assert recorder.calls == []

    def test_create_drops_unset_fields(self, recorder):
        rewards.create(recorder, "biz-1", "Free kopi", 100, type=RewardType.BONUS)
        assert recorder.last["data"] == {
            "business_id": "biz-1",
            "name": "Free kopi",
            "points_cost": 100,
            "type": "BONUS",
        }

    def test_update(self, recorder):
        rewards.update(recorder, "r-1", is_active=False, name=None, type=RewardType.CASHBACK)
        assert recorder.last["endpoint"] == "/point_rewards/r-1"
        assert recorder.last["data"] == {"is_active": False, "type": "CASHBACK"}


class TestRedemptions:
    def test_business_listing_uses_path_not_query(self, recorder):
        redemptions.get_by_business(
            recorder, "biz-1", status=RedemptionStatus.PENDING, with_customer_detail="true"
        )
        assert recorder.last["endpoint"] == (
            "/point_reward_redemptions/business/biz-1?status=PENDING&with_customer_detail=true"
        )

    def test_business_listing_filters_by_customer(self, recorder):
        redemptions.get_by_business(recorder, "biz-1", customer_id="c-7", page=2)
        assert recorder.last["endpoint"] == (
            "/point_reward_redemptions/business/biz-1?customer_id=c-7&page=2"
        )

    def test_customer_listing_filters_by_business(self, recorder):
        redemptions.get_by_customer(recorder, "c-7", business_id="biz-1", limit=5)
        assert recorder.last["endpoint"] == (
            "/point_reward_redemptions/customer/c-7?business_id=biz-1&limit=5"
        )

    def test_reward_id_goes_last(self, recorder):
        redemptions.get_by_point_reward(recorder, "r-1", page=1, with_reward_detail="false")
        assert recorder.last["endpoint"] == (
            "/point_reward_redemptions?page=1&with_reward_detail=false&point_reward_id=r-1"
        )

    def test_unknown_filter(self, recorder):
        with pytest.raises(TypeError):
            redemptions.get_all(recorder, colour="blue")

    def test_boolean_flag_rejected(self, recorder):
        with pytest.raises(ValueError):
            redemptions.get_by_customer(recorder, "c-1", with_business_detail=True)

    def test_counter_redemption(self, recorder):
        redemptions.create_with_customer_id(recorder, "c-1", "r-1", "st-1", "br-1")
        assert recorder.last["endpoint"] == "/point_reward_redemptions/customer"
        assert recorder.last["data"] == {
            "customer_id": "c-1",
            "point_reward_id": "r-1",
            "employee_id": "st-1",
            "branch_id": "br-1",
        }

    def test_status_update(self, recorder):
        redemptions.update(recorder, "rd-1", status=RedemptionStatus.COMPLETED)
        assert recorder.last["data"] == {"status": "COMPLETED"}


class TestTransactions:
    def test_listing_always_embeds_details(self, recorder):
        transactions.get_all(recorder, "biz-1", page=3, limit=10)
        assert recorder.last["endpoint"] == (
            "/point_transactions?business_id=biz-1&with_customer_detail=true"
            "&with_staff_detail=true&page=3&limit=10"
        )

    def test_create(self, recorder):
        transactions.create(recorder, "biz-1", "c-1", "br-1", -30, "st-1")
        assert recorder.last["data"]["amount"] == -30
        assert recorder.last["data"]["employee_id"] == "st-1"


class TestWallet:
    def test_usage_caches_query(self, recorder):
        wallet.get_usage_caches(recorder, "biz-1", with_config_type=True)
        assert recorder.last["endpoint"] == "/usage-caches?business_id=biz-1&with_config_type=true"

    def test_current_balance(self):
        assert wallet.current_balance({"data": {"usage_caches": [{"balance": 12.5}, {"balance": 1}]}}) == 12.5
        assert wallet.current_balance({"data": {"usage_caches": []}}) == 0
        assert wallet.current_balance({}) == 0


class TestBlast:
    def test_send(self, recorder):
        blast.send_otp(recorder, "Hi {name}", ("+6011", "+6012"), "biz-1")
        assert recorder.last["endpoint"] == "/blast/otp"
        assert recorder.last["data"]["phone_numbers"] == ["+6011", "+6012"]

    def test_nested_result(self):
        resp = {
            "message": "ok",
            "data": {
                "message": "sent",
                "data": {"usage_cache": {"balance": 3.0}, "otp_response": {"code": "000", "ref": "x"}},
            },
        }
        cache, otp = blast.blast_result(resp)
        assert cache["balance"] == 3.0
        assert otp["code"] == "000"

    def test_flat_result_is_empty(self):
        assert blast.blast_result({"data": {"usage_cache": {}}}) == ({}, {})


class TestSmallModules:
    def test_branches_path_spelling(self, recorder):
        branches.create(recorder, "biz-1", "Bangsar")
        assert recorder.last["endpoint"] == "/branchs"
        branches.update(recorder, "br-1", name="Bangsar South")
        assert recorder.last["endpoint"] == "/branchs/br-1"

    def test_staff(self, recorder):
        staff.get_all(recorder, "biz-1", page=1)
        assert recorder.last["endpoint"] == "/staffs/business/biz-1?page=1"
        staff.create(recorder, "biz-1", email="s@k.my", name="Sam", phone_number="+6012")
        assert recorder.last["data"]["business_id"] == "biz-1"

    def test_users_drop_none(self, recorder):
        users.update_user(recorder, "u-1", name="Aina", password=None)
        assert recorder.last["data"] == {"name": "Aina"}

    def test_business_search(self, recorder):
        business.search(recorder, "kopi", page=1, limit=10)
        assert recorder.last["endpoint"] == "/business/search?query=kopi&page=1&limit=10"

    def test_config_types(self, recorder):
        config_types.get_all(recorder, name="SMS")
        assert recorder.last["endpoint"] == "/config-types?name=SMS"

    def test_subscription_paths(self, recorder):
        subscription.get_products(recorder, is_trial=False)
        assert recorder.last["endpoint"] == "/subscription/products?is_trial=false"
        subscription.get_active_by_business_id(recorder, "biz-1")
        assert recorder.last["endpoint"] == (
            "/subscriptions/active/business?provider_name=STRIPE&business_id=biz-1"
        )

    def test_checkout(self, recorder):
        payment.create_checkout_session(recorder, "biz-1", 50)
        assert recorder.last["data"] == {"business_id": "biz-1", "currency": "myr", "amount": 50}

    def test_upload_is_multipart(self, recorder):
        file.upload(recorder, "logo.png", b"png", "image/png")
        assert recorder.last["endpoint"] == "/file/upload"
        assert recorder.last["files"] == {"file": ("logo.png", b"png", "image/png")}


@pytest.mark.parametrize(
    "call, expected",
    [
        (lambda c: customers.get_all(c, "b1"), "/customers?business_id=b1"),
        (lambda c: branches.get_all(c, "b1"), "/branchs?business_id=b1"),
        (lambda c: rewards.get_all(c, business_id="b1"), "/point_rewards?business_id=b1"),
        (lambda c: transactions.get_metadata(c, "b1"), "/point_transactions/metadata?business_id=b1"),
    ],
)
def test_only_business_id_when_nothing_else_given(recorder, call, expected):
    call(recorder)
    assert recorder.last["endpoint"] == expected
