import io
import os
import smtplib
import tempfile
import unittest
from decimal import Decimal
from unittest.mock import patch

from kombu.exceptions import OperationalError

from shop.data.models import OrderModel, UserModel
from shop.domain.cart import ShoppingCart
from shop.domain.enums import RoleName, StatusName
from shop.domain.errors import (
    NotFoundError,
    NotificationFailure,
    TransitionError,
    ValidationError,
)
from shop.services.cart_service import CartService
from shop.services.notification_service import (
    NotificationService,
    order_payload,
    render_message,
    send_order_notification_task,
)
from shop.services.order_service import OrderService
from shop.services.photo_service import PhotoService
from shop.services.product_service import ProductService
from shop.services.role_service import RoleService
from shop.services.status_service import StatusService
from shop.services.user_service import UserService
from tests.support import StubNotifier, add_catalog, make_session_factory, make_stores


class ServiceTestCase(unittest.TestCase):
    def setUp(self):
        self.engine, self.Session = make_session_factory()
        self.db = self.Session()
        self.first, self.second = add_catalog(self.db)
        self.redis, self.store, self.locks = make_stores()
        self.notifier = StubNotifier()
        self.carts = CartService(self.store, ProductService(self.db))
        self.orders = OrderService(self.db, self.carts, self.locks, self.notifier)

    def tearDown(self):
        self.db.close()
        self.engine.dispose()


class CartServiceTestCase(ServiceTestCase):
    def test_cart_is_created_lazily_per_session(self):
        self.assertEqual(self.carts.get_size("s1"), 0)
        self.assertEqual(self.carts.get_price("s1"), Decimal("0"))
        self.assertEqual(self.redis.keys("cart:*"), [])

        self.carts.add_product("s1", self.first.id, 2)
        self.assertEqual(self.carts.get_size("s1"), 2)
        self.assertEqual(self.carts.get_size("s2"), 0)
        self.assertEqual(sorted(self.redis.keys("cart:*")), ["cart:s1", "cart:s1:totals"])

    def test_size_and_price_read_cached_totals(self):
        self.carts.add_product("s1", self.first.id, 2)
        self.carts.add_product("s1", self.second.id, 1)

        with patch.object(ShoppingCart, "from_json", side_effect=AssertionError("cart rebuilt")):
            self.assertEqual(self.carts.get_size("s1"), 3)
            self.assertEqual(self.carts.get_price("s1"), Decimal("130.00"))

        self.carts.remove_product("s1", self.first.id)
        self.carts.remove_product("s1", self.second.id)
        self.assertEqual(self.carts.get_size("s1"), 0)
        self.assertEqual(self.redis.keys("cart:*"), [])

    def test_price_snapshot_survives_catalogue_change(self):
        self.carts.add_product("s1", self.first.id, 1)
        self.first.price = Decimal("99.00")
        self.db.commit()
        self.carts.add_product("s1", self.first.id, 1)

        cart = self.carts.get_cart("s1")
        self.assertEqual(cart.positions[0].number, 2)
        self.assertEqual(cart.get_price(), Decimal("100.00"))

    def test_unknown_and_unavailable_products(self):
        with self.assertRaises(NotFoundError):
            self.carts.add_product("s1", 12345, 1)

        self.second.available = False
        self.db.commit()
        with self.assertRaises(ValidationError):
            self.carts.add_product("s1", self.second.id, 1)

        with self.assertRaises(ValidationError):
            self.carts.add_product("s1", self.first.id, 0)
        self.assertEqual(self.carts.get_size("s1"), 0)

    def test_remove_and_clear(self):
        self.carts.add_product("s1", self.first.id, 2)
        self.carts.add_product("s1", self.second.id, 1)

        cart = self.carts.remove_product("s1", self.first.id)
        self.assertEqual(cart.get_size(), 1)
        self.carts.remove_product("s1", 777)
        self.assertEqual(self.carts.get_size("s1"), 1)

        self.carts.clear("s1")
        self.assertEqual(self.carts.get_size("s1"), 0)
        self.assertEqual(self.carts.get_price("s1"), Decimal("0"))

    def test_view(self):
        self.carts.add_product("s1", self.first.id, 2)
        view = self.carts.to_view(self.carts.get_cart("s1"))
        self.assertEqual(view["cart_size"], 2)
        self.assertEqual(view["price_of_cart"], Decimal("100.00"))
        self.assertEqual(view["sale_positions"][0]["title"], "Espresso")


class CheckoutTestCase(ServiceTestCase):
    def checkout(self, session_id="s1"):
        return self.orders.checkout(session_id, "Ann", "ann@example.com", "555-01")

    def test_scenario(self):
        self.carts.add_product("s1", self.first.id, 2)
        self.carts.add_product("s1", self.second.id, 1)
        self.assertEqual(self.carts.get_size("s1"), 3)
        self.assertEqual(self.carts.get_price("s1"), Decimal("130.00"))

        self.carts.remove_product("s1", self.first.id)
        self.assertEqual(self.carts.get_size("s1"), 1)
        self.assertEqual(self.carts.get_price("s1"), Decimal("30.00"))

        order = self.checkout()

        self.assertIsNotNone(order)
        self.assertEqual(len(order.sale_positions), 1)
        position = order.sale_positions[0]
        self.assertEqual(position.product_id, self.second.id)
        self.assertEqual(position.number, 1)
        self.assertEqual(position.price, Decimal("30.00"))
        self.assertEqual(order.total, Decimal("30.00"))
        self.assertEqual(self.carts.get_size("s1"), 0)

    def test_order_defaults(self):
        self.carts.add_product("s1", self.first.id, 1)
        order = self.checkout()

        self.assertEqual(order.status.title, StatusName.NEW)
        self.assertEqual(order.client.role.title, RoleName.CLIENT)
        self.assertEqual(order.client.name, "Ann")
        self.assertIsNone(order.manager)
        self.assertTrue(order.number.endswith(f"{order.id:06d}"))
        self.assertEqual(self.notifier.sent, [order.number])

    def test_empty_cart_creates_no_order(self):
        self.assertIsNone(self.checkout())
        self.assertEqual(self.db.query(OrderModel).count(), 0)
        self.assertEqual(self.notifier.sent, [])

    def test_second_submit_after_clear_is_noop(self):
        self.carts.add_product("s1", self.first.id, 1)
        self.assertIsNotNone(self.checkout())
        self.assertIsNone(self.checkout())
        self.assertEqual(self.db.query(OrderModel).count(), 1)

    def test_concurrent_submit_is_rejected_while_locked(self):
        self.carts.add_product("s1", self.first.id, 1)
        self.locks.acquire_checkout_lock("s1", "other-request")

        self.assertIsNone(self.checkout())
        self.assertEqual(self.db.query(OrderModel).count(), 0)
        self.assertEqual(self.carts.get_size("s1"), 1)

        self.locks.release_checkout_lock("s1", "other-request")
        self.assertIsNotNone(self.checkout())

    def test_lock_is_released(self):
        self.carts.add_product("s1", self.first.id, 1)
        self.checkout()
        self.assertEqual(self.redis.keys("checkout:*"), [])

    def test_order_is_snapshot_of_cart(self):
        self.carts.add_product("s1", self.first.id, 2)
        order = self.checkout()

        self.carts.add_product("s1", self.second.id, 5)
        self.first.price = Decimal("1.00")
        self.db.commit()

        self.db.expire_all()
        stored = self.orders.get_order(order.id)
        self.assertEqual([(p.product_id, p.number) for p in stored.sale_positions], [(self.first.id, 2)])
        self.assertEqual(stored.total, Decimal("100.00"))

    def test_blank_contact_fields(self):
        self.carts.add_product("s1", self.first.id, 1)
        with self.assertRaises(ValidationError):
            self.orders.checkout("s1", "Ann", "  ", "555")
        self.assertEqual(self.db.query(OrderModel).count(), 0)
        # koszyk zostaje, lock zwolniony
        self.assertEqual(self.carts.get_size("s1"), 1)
        self.assertEqual(self.redis.keys("checkout:*"), [])

    def test_notification_failure_keeps_order(self):
        self.orders.notification_service = StubNotifier(error=NotificationFailure("smtp down"))
        self.carts.add_product("s1", self.first.id, 1)

        order = self.checkout()

        self.assertIsNotNone(order)
        self.assertEqual(self.db.query(OrderModel).count(), 1)
        self.assertEqual(self.carts.get_size("s1"), 0)

    def test_notification_not_queued_keeps_order(self):
        self.orders.notification_service = StubNotifier(result=False)
        self.carts.add_product("s1", self.first.id, 1)
        self.assertIsNotNone(self.checkout())
        self.assertEqual(self.carts.get_size("s1"), 0)

    def test_broker_crash_keeps_order_and_clears_cart(self):
        self.orders.notification_service = StubNotifier(error=ConnectionError("broker down"))
        self.carts.add_product("s1", self.first.id, 1)

        order = self.checkout()

        self.assertIsNotNone(order)
        self.assertEqual(self.db.query(OrderModel).count(), 1)
        self.assertEqual(self.carts.get_size("s1"), 0)
        self.assertIsNone(self.checkout())
        self.assertEqual(self.db.query(OrderModel).count(), 1)
        self.assertEqual(self.redis.keys("checkout:*"), [])

    def test_failed_clear_does_not_order_same_cart_twice(self):
        self.carts.add_product("s1", self.first.id, 2)

        with patch.object(self.carts, "clear", side_effect=RuntimeError("session store gone")):
            order = self.checkout()
            self.assertIsNotNone(order)
            self.assertEqual(self.carts.get_size("s1"), 2)

            self.assertIsNone(self.checkout())

        self.assertEqual(self.db.query(OrderModel).count(), 1)
        self.assertEqual(self.redis.keys("checkout:*"), [])

        # kolejna proba czysci juz zamowiony koszyk
        self.assertIsNone(self.checkout())
        self.assertEqual(self.carts.get_size("s1"), 0)
        self.assertEqual(self.db.query(OrderModel).count(), 1)

    def test_new_cart_after_checkout_can_be_ordered(self):
        self.carts.add_product("s1", self.first.id, 1)
        first_order = self.checkout()
        self.carts.add_product("s1", self.first.id, 1)
        second_order = self.checkout()

        self.assertIsNotNone(second_order)
        self.assertNotEqual(first_order.cart_token, second_order.cart_token)
        self.assertEqual(self.db.query(OrderModel).count(), 2)

    def test_returning_client_is_reused(self):
        self.carts.add_product("s1", self.first.id, 1)
        first_order = self.checkout()
        self.carts.add_product("s2", self.second.id, 1)
        second_order = self.checkout("s2")

        self.assertEqual(first_order.client.id, second_order.client.id)
        self.assertEqual(self.db.query(UserModel).count(), 1)
        self.assertNotEqual(first_order.number, second_order.number)

    def test_lookup(self):
        self.carts.add_product("s1", self.first.id, 1)
        order = self.checkout()
        self.assertEqual(self.orders.get_by_number(order.number).id, order.id)
        self.assertEqual(len(self.orders.get_all()), 1)
        with self.assertRaises(NotFoundError):
            self.orders.get_order(999)


class StatusServiceTestCase(ServiceTestCase):
    def setUp(self):
        super().setUp()
        self.carts.add_product("s1", self.first.id, 1)
        self.order = self.orders.checkout("s1", "Ann", "ann@example.com", "555")
        self.statuses = StatusService(self.db)
        self.manager = UserService(self.db).create_staff(
            "Bob", "bob@example.com", "777", "bob", "secret1", RoleName.MANAGER
        )

    def test_accept_then_done(self):
        order = self.statuses.change_order_status(self.order, StatusName.ACCEPTED, self.manager)
        self.assertEqual(order.status.title, StatusName.ACCEPTED)
        self.assertEqual(order.manager.username, "bob")

        order = self.statuses.change_order_status(order, StatusName.DONE)
        self.assertEqual(order.status.title, StatusName.DONE)

    def test_illegal_transition(self):
        with self.assertRaises(TransitionError):
            self.statuses.change_order_status(self.order, StatusName.DONE)
        self.assertEqual(self.order.status.title, StatusName.NEW)

    def test_defaults(self):
        self.assertEqual(self.statuses.get_default().title, StatusName.NEW)
        self.assertEqual(RoleService(self.db).get_default().title, RoleName.CLIENT)
        with self.assertRaises(NotFoundError):
            self.statuses.get(StatusName.REJECTED)


class UserServiceTestCase(ServiceTestCase):
    def test_authenticate(self):
        users = UserService(self.db)
        users.create_staff("Bob", "bob@example.com", "777", "bob", "secret1", RoleName.ADMIN)

        self.assertEqual(users.authenticate("bob", "secret1").role.title, RoleName.ADMIN)
        self.assertIsNone(users.authenticate("bob", "wrong"))
        self.assertIsNone(users.authenticate("nobody", "secret1"))
        self.assertIsNone(users.authenticate("", ""))

    def test_duplicate_username(self):
        users = UserService(self.db)
        users.create_staff("Bob", "bob@example.com", "777", "bob", "secret1", RoleName.MANAGER)
        with self.assertRaises(ValidationError):
            users.create_staff("Rob", "rob@example.com", "778", "bob", "secret2", RoleName.MANAGER)

    def test_get_missing_user(self):
        with self.assertRaises(NotFoundError):
            UserService(self.db).get_user(42)


class ProductServiceTestCase(ServiceTestCase):
    def setUp(self):
        super().setUp()
        self.products = ProductService(self.db)

    def data(self, **overrides):
        data = {"title": "Mocha", "url": "mocha", "article": 103, "price": Decimal("40.00")}
        data.update(overrides)
        return data

    def test_lookups(self):
        self.assertEqual(self.products.get_by_url_or_article("101").id, self.first.id)
        self.assertEqual(self.products.get_by_url_or_article("latte").id, self.second.id)
        self.assertEqual(len(self.products.get_by_category_url("coffee")), 2)
        with self.assertRaises(NotFoundError):
            self.products.get_by_url("missing")
        with self.assertRaises(ValidationError):
            self.products.get_by_url(" ")

    def test_random_by_category_excludes_product(self):
        featured = self.products.get_random_by_category(4, self.first.category_id, self.first.id)
        self.assertEqual([p.id for p in featured], [self.second.id])

    def test_url_and_article_unique_among_available(self):
        with self.assertRaises(ValidationError):
            self.products.add(self.data(url="espresso"))
        with self.assertRaises(ValidationError):
            self.products.add(self.data(article=101))

        created = self.products.add(self.data())
        self.assertEqual(created.url, "mocha")

        with self.assertRaises(ValidationError):
            self.products.update(created.id, {"url": "latte"})

    def test_removed_product_frees_url(self):
        self.products.remove(self.first.id)
        self.assertFalse(self.first.available)
        with self.assertRaises(NotFoundError):
            self.products.get_by_url("espresso")

        created = self.products.add(self.data(url="espresso", article=101))
        self.assertEqual(self.products.get_by_url("espresso").id, created.id)

    def test_unknown_category(self):
        with self.assertRaises(NotFoundError):
            self.products.add(self.data(category_id=999))

    def test_non_ascii_digits_are_looked_up_as_url(self):
        with self.assertRaises(NotFoundError):
            self.products.get_by_url_or_article("²")

    def test_update_ignores_none_values(self):
        updated = self.products.update(
            self.first.id,
            {"title": None, "available": None, "price": Decimal("55.00")},
        )
        self.assertEqual(updated.title, "Espresso")
        self.assertTrue(updated.available)
        self.assertEqual(updated.price, Decimal("55.00"))


class NotificationServiceTestCase(ServiceTestCase):
    def setUp(self):
        super().setUp()
        self.carts.add_product("s1", self.first.id, 2)
        self.order = self.orders.checkout("s1", "Ann", "ann@example.com", "555-01")
        self.payload = order_payload(self.order)

    def test_payload_and_message(self):
        self.assertEqual(self.payload["number"], self.order.number)
        self.assertEqual(self.payload["status"], "NEW")
        self.assertEqual(self.payload["client"]["email"], "ann@example.com")
        self.assertEqual(self.payload["positions"], [{"title": "Espresso", "number": 2, "price": "50.00"}])

        message = render_message(self.payload)
        self.assertIn(f"Order {self.order.number} (NEW)", message)
        self.assertIn("Espresso x2 @ 50.00", message)
        self.assertIn("Total: 100.00", message)

    def test_order_is_queued(self):
        with patch("shop.services.notification_service.send_order_notification_task.delay") as delay:
            self.assertTrue(NotificationService().send_order_notification(self.order))
        delay.assert_called_once_with(self.payload)

    def test_enqueue_errors_are_swallowed(self):
        for error in (OperationalError("broker down"), RuntimeError("boom")):
            with patch(
                "shop.services.notification_service.send_order_notification_task.delay",
                side_effect=error,
            ):
                self.assertFalse(NotificationService().send_order_notification(self.order))

    @patch("shop.services.notification_service.SMTP_HOST", "")
    def test_task_without_smtp_only_logs(self):
        with patch("shop.services.notification_service._send_mail") as send_mail:
            result = send_order_notification_task(self.payload)
        self.assertEqual(result, {"number": self.order.number, "status": "logged"})
        send_mail.assert_not_called()

    @patch("shop.services.notification_service.MANAGER_EMAILS", ["boss@example.com"])
    @patch("shop.services.notification_service.SMTP_HOST", "smtp.test")
    def test_task_sends_mail(self):
        with patch("shop.services.notification_service._send_mail") as send_mail:
            result = send_order_notification_task(self.payload)

        self.assertEqual(result, {"number": self.order.number, "status": "sent"})
        message = send_mail.call_args.args[0]
        self.assertEqual(message["To"], "ann@example.com, boss@example.com")
        self.assertEqual(message["Subject"], f"Order {self.order.number}")
        self.assertIn("Total: 100.00", message.get_content())

    @patch("shop.services.notification_service.SMTP_HOST", "smtp.test")
    def test_task_smtp_error_raises_notification_failure(self):
        with patch(
            "shop.services.notification_service._send_mail",
            side_effect=smtplib.SMTPException("refused"),
        ):
            with self.assertRaises(NotificationFailure):
                send_order_notification_task(self.payload)


class PhotoServiceTestCase(ServiceTestCase):
    def setUp(self):
        super().setUp()
        self.tmp = tempfile.TemporaryDirectory()
        self.photos = PhotoService(self.db, photo_dir=self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()
        super().tearDown()

    def test_save_and_delete_file(self):
        name = self.photos.save_file("../beans.jpg", io.BytesIO(b"jpeg"))
        self.assertEqual(name, "beans.jpg")
        self.assertTrue(os.path.isfile(os.path.join(self.tmp.name, "beans.jpg")))

        self.assertTrue(self.photos.delete_file(name))
        self.assertFalse(self.photos.delete_file(name))
        self.assertFalse(self.photos.delete_file(""))

    def test_get_and_remove(self):
        self.photos.add("beans", "beans.jpg")
        self.assertEqual(self.photos.get("beans").photo_link_short, "beans.jpg")

        self.photos.remove("beans")
        with self.assertRaises(NotFoundError):
            self.photos.get("beans")
        with self.assertRaises(ValidationError):
            self.photos.get("")
        with self.assertRaises(ValidationError):
            self.photos.remove(" ")


if __name__ == "__main__":
    unittest.main()
