"""
WorkforceOne Pricing - Catalog Configuration

Central configuration for all pricing reference data:
user tiers, the modular feature catalog, the yearly discount and the
display currency table.

Prices are in US Dollars ($) per month.
"""

from decimal import Decimal
from typing import Dict, List, Tuple

from app.models.currency import CurrencyInfo
from app.models.pricing import Feature, UserTier
from app.models.pricing_enums import BillingUnit, FeatureCategory


# =============================================================================
# BILLING CONSTANTS
# =============================================================================

MONTHS_PER_YEAR = 12

# Yearly billing: 12 months at 80% (20% discount)
YEARLY_DISCOUNT_RATE = Decimal("0.20")

BASE_CURRENCY = "USD"


# =============================================================================
# USER TIERS (per user, per month)
# =============================================================================

DEFAULT_USER_TIERS: Tuple[UserTier, ...] = (
    UserTier(range_start=1, range_end=10, per_user_price=Decimal("0"), name="Starter (1-10 users)"),
    UserTier(range_start=11, range_end=50, per_user_price=Decimal("2"), name="Small Team (11-50 users)"),
    UserTier(range_start=51, range_end=200, per_user_price=Decimal("4"), name="Medium Team (51-200 users)"),
    UserTier(range_start=201, range_end=None, per_user_price=Decimal("6"), name="Large Team (201+ users)"),
)


# =============================================================================
# FEATURE CATALOG
# =============================================================================

def _feature(
    feature_id: str,
    name: str,
    category: FeatureCategory,
    price: str,
    unit: BillingUnit,
    description: str,
    is_free: bool = False,
    dependencies: Tuple[str, ...] = (),
    popular: bool = False,
) -> Feature:
    return Feature(
        id=feature_id,
        name=name,
        category=category,
        unit_price=Decimal(price),
        billing_unit=unit,
        is_free=is_free,
        dependencies=frozenset(dependencies),
        popular=popular,
        description=description,
    )


DEFAULT_FEATURES: Tuple[Feature, ...] = (
    # Core features (free)
    _feature("team_management", "Team Management", FeatureCategory.CORE, "0", BillingUnit.PER_ORGANIZATION,
             "Create and manage teams, assign roles, and organize your workforce", is_free=True),
    _feature("basic_attendance", "Basic Attendance", FeatureCategory.CORE, "0", BillingUnit.PER_ORGANIZATION,
             "Clock in/out tracking, basic attendance reports", is_free=True),
    _feature("overview_dashboard", "Overview Dashboard", FeatureCategory.CORE, "0", BillingUnit.PER_ORGANIZATION,
             "Essential metrics and team overview", is_free=True),
    _feature("basic_tasks", "Basic Task Management", FeatureCategory.CORE, "0", BillingUnit.PER_ORGANIZATION,
             "Create, assign, and track simple tasks", is_free=True),
    _feature("mobile_app", "Mobile App Access", FeatureCategory.CORE, "0", BillingUnit.PER_ORGANIZATION,
             "iOS and Android mobile applications", is_free=True),

    # Productivity
    _feature("advanced_tasks", "Advanced Task Management", FeatureCategory.PRODUCTIVITY, "3", BillingUnit.PER_USER,
             "Workflows, dependencies, custom fields, and automation", popular=True),
    _feature("time_tracking", "Time Tracking", FeatureCategory.PRODUCTIVITY, "2", BillingUnit.PER_USER,
             "Detailed time tracking, timesheets, and billing integration"),
    _feature("advanced_forms", "Advanced Forms", FeatureCategory.PRODUCTIVITY, "4", BillingUnit.PER_USER,
             "Custom form builder, conditional logic, and AI form scanner", popular=True),
    _feature("leave_management", "Leave Management", FeatureCategory.PRODUCTIVITY, "2", BillingUnit.PER_USER,
             "Leave requests, approvals, balances, and calendar integration"),
    _feature("workflow_automation", "Workflow Automation", FeatureCategory.PRODUCTIVITY, "5", BillingUnit.PER_USER,
             "Automate repetitive tasks and business processes"),
    _feature("site_outlet_visits", "Site/Outlet Visits", FeatureCategory.PRODUCTIVITY, "3", BillingUnit.PER_USER,
             "Track field visits, retail audits, customer check-ins with photo verification", popular=True),

    # Analytics
    _feature("advanced_analytics", "Advanced Analytics", FeatureCategory.ANALYTICS, "50", BillingUnit.PER_ORGANIZATION,
             "Detailed insights, custom dashboards, and predictive analytics"),
    _feature("custom_reports", "Custom Reports", FeatureCategory.ANALYTICS, "30", BillingUnit.PER_ORGANIZATION,
             "Build custom reports, scheduled delivery, and data exports"),
    _feature("performance_tracking", "Performance Tracking", FeatureCategory.ANALYTICS, "40", BillingUnit.PER_ORGANIZATION,
             "Employee performance metrics and KPI monitoring"),

    # Location
    _feature("gps_tracking", "GPS Tracking", FeatureCategory.LOCATION, "3", BillingUnit.PER_USER,
             "Real-time location tracking and geofencing"),
    _feature("route_optimization", "Route Optimization", FeatureCategory.LOCATION, "4", BillingUnit.PER_USER,
             "AI-powered route planning and optimization", dependencies=("gps_tracking",)),

    # Integrations
    _feature("ai_form_scanner", "AI Form Scanner", FeatureCategory.INTEGRATION, "50", BillingUnit.PER_ORGANIZATION,
             "Convert paper forms to digital instantly using AI vision", popular=True),
    _feature("api_access", "API Access", FeatureCategory.INTEGRATION, "75", BillingUnit.PER_ORGANIZATION,
             "RESTful API access for custom integrations"),
    _feature("sso_integration", "SSO & LDAP", FeatureCategory.INTEGRATION, "100", BillingUnit.PER_ORGANIZATION,
             "Single sign-on and enterprise authentication"),
    _feature("custom_integrations", "Custom Integrations", FeatureCategory.INTEGRATION, "250", BillingUnit.PER_ORGANIZATION,
             "Bespoke integrations with your existing systems"),

    # Support
    _feature("priority_support", "Priority Support", FeatureCategory.SUPPORT, "75", BillingUnit.PER_ORGANIZATION,
             "24/7 chat and email support with faster response times"),
    _feature("dedicated_manager", "Dedicated Account Manager", FeatureCategory.SUPPORT, "500", BillingUnit.PER_ORGANIZATION,
             "Personal account manager for enterprise support"),
)


CATEGORY_NAMES: Dict[FeatureCategory, str] = {
    FeatureCategory.CORE: "Core Features (Free)",
    FeatureCategory.PRODUCTIVITY: "Productivity",
    FeatureCategory.ANALYTICS: "Analytics",
    FeatureCategory.LOCATION: "Location Services",
    FeatureCategory.INTEGRATION: "Integrations",
    FeatureCategory.SUPPORT: "Support",
}


# =============================================================================
# CURRENCIES (exchange rate = units per 1 USD)
# =============================================================================

# Currencies with no minor unit in display
ZERO_DECIMAL_CURRENCIES = frozenset({"JPY", "KRW", "VND", "IDR"})


def _currency(code: str, symbol: str, name: str, rate: str) -> CurrencyInfo:
    return CurrencyInfo(
        code=code,
        symbol=symbol,
        name=name,
        exchange_rate=Decimal(rate),
        minor_unit_digits=0 if code in ZERO_DECIMAL_CURRENCIES else 2,
    )


CURRENCIES: Dict[str, CurrencyInfo] = {
    c.code: c
    for c in (
        _currency("USD", "$", "US Dollar", "1"),
        _currency("EUR", "€", "Euro", "0.85"),
        _currency("GBP", "£", "British Pound", "0.73"),
        _currency("ZAR", "R", "South African Rand", "18.50"),
        _currency("CAD", "C$", "Canadian Dollar", "1.35"),
        _currency("AUD", "A$", "Australian Dollar", "1.50"),
        _currency("NZD", "NZ$", "New Zealand Dollar", "1.40"),
        _currency("JPY", "¥", "Japanese Yen", "110"),
        _currency("KRW", "₩", "South Korean Won", "1180"),
        _currency("INR", "₹", "Indian Rupee", "74"),
        _currency("BRL", "R$", "Brazilian Real", "5.20"),
        _currency("MXN", "MX$", "Mexican Peso", "20"),
        _currency("SGD", "S$", "Singapore Dollar", "1.35"),
        _currency("HKD", "HK$", "Hong Kong Dollar", "7.80"),
        _currency("CNY", "¥", "Chinese Yuan", "6.45"),
        _currency("SEK", "kr", "Swedish Krona", "8.60"),
        _currency("NOK", "kr", "Norwegian Krone", "8.40"),
        _currency("DKK", "kr", "Danish Krone", "6.30"),
        _currency("CHF", "CHF", "Swiss Franc", "0.92"),
        _currency("PLN", "zł", "Polish Zloty", "3.90"),
        _currency("AED", "د.إ", "UAE Dirham", "3.67"),
        _currency("SAR", "﷼", "Saudi Riyal", "3.75"),
        _currency("NGN", "₦", "Nigerian Naira", "410"),
        _currency("KES", "KSh", "Kenyan Shilling", "108"),
        _currency("GHS", "₵", "Ghanaian Cedi", "6.10"),
        _currency("PHP", "₱", "Philippine Peso", "50"),
        _currency("THB", "฿", "Thai Baht", "32"),
        _currency("VND", "₫", "Vietnamese Dong", "23000"),
        _currency("IDR", "Rp", "Indonesian Rupiah", "14200"),
        _currency("MYR", "RM", "Malaysian Ringgit", "4.15"),
    )
}

COUNTRY_CURRENCY_MAP: Dict[str, str] = {
    "US": "USD", "CA": "CAD", "GB": "GBP", "AU": "AUD", "NZ": "NZD",
    "DE": "EUR", "FR": "EUR", "IT": "EUR", "ES": "EUR", "NL": "EUR",
    "BE": "EUR", "AT": "EUR", "PT": "EUR", "FI": "EUR", "IE": "EUR",
    "ZA": "ZAR", "JP": "JPY", "KR": "KRW", "IN": "INR", "BR": "BRL",
    "MX": "MXN", "SG": "SGD", "HK": "HKD", "CN": "CNY", "SE": "SEK",
    "NO": "NOK", "DK": "DKK", "CH": "CHF", "PL": "PLN", "AE": "AED",
    "SA": "SAR", "NG": "NGN", "KE": "KES", "GH": "GHS", "PH": "PHP",
    "TH": "THB", "VN": "VND", "ID": "IDR", "MY": "MYR",
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_default_features() -> List[Feature]:
    """Get the default feature catalog (a fresh list; features are immutable)."""
    return list(DEFAULT_FEATURES)


def get_default_user_tiers() -> List[UserTier]:
    """Get the default user tier table."""
    return list(DEFAULT_USER_TIERS)


def get_category_name(category: FeatureCategory) -> str:
    """Get display name for a feature category."""
    return CATEGORY_NAMES.get(category, category.value.title())


def get_free_feature_ids() -> List[str]:
    """Ids of the free core features in the default catalog."""
    return [f.id for f in DEFAULT_FEATURES if f.is_free]
