"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from food_ordering.adapters.file_notification_queue import JsonLinesNotificationQueue
from food_ordering.adapters.nominatim_client import HttpxNominatimClient
from food_ordering.adapters.osrm_client import HttpxOsrmClient
from food_ordering.adapters.reachability import HttpxReachabilityProbe
from food_ordering.adapters.smtp_mailer import SmtpMailer
from food_ordering.adapters.supabase_cart_repository import SupabaseCartRepository
from food_ordering.adapters.supabase_chef_repository import SupabaseChefRepository
from food_ordering.adapters.supabase_food_repository import SupabaseFoodRepository
from food_ordering.adapters.supabase_order_repository import SupabaseOrderRepository
from food_ordering.adapters.supabase_token_repository import SupabaseTokenRepository
from food_ordering.adapters.supabase_unit_of_work import SupabaseUnitOfWork
from food_ordering.adapters.supabase_user_repository import SupabaseUserRepository
from food_ordering.config import Settings, parse_endpoints
from food_ordering.domain.locations import Coordinates
from food_ordering.services.accounts import AccountService, TokenVerifier
from food_ordering.services.cart import CartService
from food_ordering.services.catalog import CatalogService
from food_ordering.services.chefs import ChefLoadBalancer, ChefService
from food_ordering.services.checkout import CheckoutService
from food_ordering.services.delivery import DeliveryFeeCalculator
from food_ordering.services.locations import LocationResolver, load_dataset
from food_ordering.services.notifications import NotificationService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_verifier: TokenVerifier
    account_service: AccountService
    catalog_service: CatalogService
    cart_service: CartService
    chef_service: ChefService
    checkout_service: CheckoutService
    notification_service: NotificationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    unit_of_work = SupabaseUnitOfWork(supabase_client)
    user_repository = SupabaseUserRepository(supabase_client, unit_of_work)
    food_repository = SupabaseFoodRepository(supabase_client, unit_of_work)
    chef_repository = SupabaseChefRepository(supabase_client, unit_of_work)
    cart_repository = SupabaseCartRepository(supabase_client, unit_of_work)
    order_repository = SupabaseOrderRepository(supabase_client, unit_of_work)
    token_repository = SupabaseTokenRepository(supabase_client)

    probe = HttpxReachabilityProbe.create(
        parse_endpoints(resolved_settings.reachability_endpoints),
        timeout_seconds=resolved_settings.reachability_timeout_seconds,
    )
    geocoding_client = HttpxNominatimClient.create(
        base_url=resolved_settings.nominatim_url,
        user_agent=resolved_settings.geocoder_user_agent,
        timeout_seconds=resolved_settings.upstream_timeout_seconds,
    )
    routing_client = HttpxOsrmClient.create(
        resolved_settings.osrm_url,
        timeout_seconds=resolved_settings.upstream_timeout_seconds,
    )
    location_resolver = LocationResolver(
        geocoding_client=geocoding_client,
        routing_client=routing_client,
        probe=probe,
        dataset=load_dataset(resolved_settings.locations_dataset_path),
        origin=Coordinates(resolved_settings.origin_lat, resolved_settings.origin_lng),
        region=resolved_settings.service_region,
        country=resolved_settings.service_country,
        circuity_factor=resolved_settings.road_circuity_factor,
    )
    notification_service = NotificationService(
        mailer=SmtpMailer(
            host=resolved_settings.smtp_host,
            port=resolved_settings.smtp_port,
            username=resolved_settings.smtp_username,
            password=resolved_settings.smtp_password,
            sender_name=resolved_settings.mail_sender_name,
        ),
        queue=JsonLinesNotificationQueue(
            Path(resolved_settings.notification_queue_path)
        ),
        probe=probe,
    )
    balancer = ChefLoadBalancer()
    checkout_service = CheckoutService(
        location_resolver=location_resolver,
        fee_calculator=DeliveryFeeCalculator(
            rate_per_km=resolved_settings.delivery_rate_per_km,
            minimum_fee=resolved_settings.minimum_delivery_fee,
        ),
        balancer=balancer,
        cart_repository=cart_repository,
        food_repository=food_repository,
        chef_repository=chef_repository,
        order_repository=order_repository,
        user_repository=user_repository,
        unit_of_work=unit_of_work,
        notification_service=notification_service,
    )
    chef_service = ChefService(
        chef_repository=chef_repository,
        order_repository=order_repository,
        unit_of_work=unit_of_work,
        balancer=balancer,
    )

    async def close_resources() -> None:
        await probe.close()
        await geocoding_client.close()
        await routing_client.close()

    return AppContainer(
        settings=resolved_settings,
        token_verifier=TokenVerifier(token_repository),
        account_service=AccountService(
            user_repository=user_repository,
            chef_repository=chef_repository,
            token_repository=token_repository,
            admin_emails=parse_endpoints(resolved_settings.admin_emails),
        ),
        catalog_service=CatalogService(food_repository),
        cart_service=CartService(cart_repository, food_repository),
        chef_service=chef_service,
        checkout_service=checkout_service,
        notification_service=notification_service,
        close_resources=close_resources,
    )
