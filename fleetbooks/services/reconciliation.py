"""
Reconciliation arithmetic for trips, drivers and the business as a whole.

Everything here is pure: callers load records (ORM rows or any object with the
same attribute names) and pass them in. Money is plain float rupees.
"""

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

EARNING_PLATFORMS = ("uber", "indrive", "yatri", "rapido", "offline")
MULTIPLE_PLATFORM = "multiple"

UBER_DAILY_COMMISSION = 117.0
YATRI_COMMISSION_PER_TRIP = 10.0


def to_paise(amount) -> float:
    """Round a rupee amount to two decimals, the precision shown and stored."""
    return round(float(amount or 0.0), 2)


class PlatformEntry(BaseModel):
    earnings: float = Field(default=0.0, ge=0)
    cash: float = Field(default=0.0, ge=0)


class FuelEntry(BaseModel):
    id: Optional[str] = None
    amount: float = Field(default=0.0, ge=0)
    description: str = ""


class TripInput(BaseModel):
    """Raw figures for one driver-day as entered on the trip form."""

    commission_percentage: float = Field(gt=0, le=100)
    platforms: Dict[str, PlatformEntry] = Field(default_factory=dict)
    has_uber_commission: bool = False
    yatri_trips: int = Field(default=0, ge=0)
    fuel_entries: List[FuelEntry] = Field(default_factory=list)
    other_expenses: float = Field(default=0.0, ge=0)
    online_payment: float = Field(default=0.0, ge=0)
    cash_to_cashier: float = Field(default=0.0, ge=0)
    driver_took_salary: bool = False
    negative_handling_option: Optional[str] = None
    amount_from_cashier: float = Field(default=0.0, ge=0)

    def platform(self, name: str) -> PlatformEntry:
        return self.platforms.get(name) or PlatformEntry()


class TripFinancials(BaseModel):
    total_earnings: float
    total_cash_collected: float
    uber_commission: float
    yatri_commission: float
    total_commission: float
    fuel_cost: float
    other_expenses: float
    online_payment: float
    cash_to_cashier: float
    net_earnings: float
    earned_salary: float
    driver_salary: float
    cash_in_hand: float

    @property
    def is_negative(self) -> bool:
        return self.cash_in_hand < 0

    @property
    def shortfall(self) -> float:
        return -self.cash_in_hand if self.cash_in_hand < 0 else 0.0


class DriverLedgerDelta(BaseModel):
    """Increments applied to a driver's running totals when a trip is saved."""

    earnings: float
    salary_paid: float
    pending_salary: float
    adjusted_salary: float


class RiskThresholds(BaseModel):
    pending_salary_alert: float = 5000.0
    pending_salary_critical: float = 10000.0
    online_payment_alert: float = 5000.0
    online_payment_critical: float = 15000.0
    daily_revenue_target: float = 10000.0


def calculate_trip_financials(trip_input: TripInput,
                              uber_daily_commission: float = UBER_DAILY_COMMISSION,
                              yatri_commission_per_trip: float = YATRI_COMMISSION_PER_TRIP) -> TripFinancials:
    """
    Compute commission, net earnings, salary share and cash left with the driver.

    Salary is the driver's percentage of net earnings (gross minus platform
    commission). It only reduces cash in hand when the driver took it that day.
    """
    total_earnings = sum(trip_input.platform(p).earnings for p in EARNING_PLATFORMS)
    total_cash = sum(trip_input.platform(p).cash for p in EARNING_PLATFORMS)

    uber_commission = uber_daily_commission if trip_input.has_uber_commission else 0.0
    yatri_commission = trip_input.yatri_trips * yatri_commission_per_trip
    total_commission = uber_commission + yatri_commission

    fuel_cost = sum(entry.amount for entry in trip_input.fuel_entries)
    net_earnings = total_earnings - total_commission
    earned_salary = net_earnings * trip_input.commission_percentage / 100
    driver_salary = earned_salary if trip_input.driver_took_salary else 0.0

    cash_in_hand = (
        total_cash
        - trip_input.online_payment
        - fuel_cost
        - trip_input.other_expenses
        - driver_salary
        - trip_input.cash_to_cashier
    )

    return TripFinancials(
        total_earnings=to_paise(total_earnings),
        total_cash_collected=to_paise(total_cash),
        uber_commission=to_paise(uber_commission),
        yatri_commission=to_paise(yatri_commission),
        total_commission=to_paise(total_commission),
        fuel_cost=to_paise(fuel_cost),
        other_expenses=to_paise(trip_input.other_expenses),
        online_payment=to_paise(trip_input.online_payment),
        cash_to_cashier=to_paise(trip_input.cash_to_cashier),
        net_earnings=to_paise(net_earnings),
        earned_salary=to_paise(earned_salary),
        driver_salary=to_paise(driver_salary),
        cash_in_hand=to_paise(cash_in_hand),
    )


def calculate_driver_ledger_delta(financials: TripFinancials, driver_took_salary: bool,
                                  negative_handling_option: Optional[str] = None) -> DriverLedgerDelta:
    """
    Running-total increments for the driver after a trip.

    A shortfall pushed onto salary is added to the salary paid out that day.
    Salary not taken on the day accrues to pending salary.
    """
    adjusted_salary = financials.driver_salary
    if negative_handling_option == "salary" and financials.is_negative:
        adjusted_salary = to_paise(financials.driver_salary + financials.shortfall)

    if driver_took_salary:
        return DriverLedgerDelta(
            earnings=financials.total_earnings,
            salary_paid=adjusted_salary,
            pending_salary=0.0,
            adjusted_salary=adjusted_salary,
        )
    return DriverLedgerDelta(
        earnings=financials.total_earnings,
        salary_paid=0.0,
        pending_salary=financials.earned_salary,
        adjusted_salary=adjusted_salary,
    )


def apply_salary_payment(pending_salary: float, amount: float) -> float:
    """Pending salary after a payment, clamped at zero."""
    return max(0.0, to_paise((pending_salary or 0.0) - amount))


def build_platform_details(trip_input: TripInput, financials: TripFinancials) -> dict:
    details = {}
    for name in EARNING_PLATFORMS:
        entry = trip_input.platform(name)
        details[name] = {'earnings': entry.earnings, 'cash': entry.cash}
    details['uber']['commission'] = financials.uber_commission
    details['yatri']['commission'] = financials.yatri_commission
    details['yatri']['trips'] = trip_input.yatri_trips
    return details


def _num(obj, attr) -> float:
    value = getattr(obj, attr, None)
    return float(value) if value else 0.0


def trip_net_earnings(trip) -> float:
    return _num(trip, 'trip_amount') - _num(trip, 'commission_amount')


def trip_expenses(trip) -> float:
    return _num(trip, 'fuel_cost') + _num(trip, 'other_expenses')


def empty_platform_breakdown() -> Dict[str, float]:
    return {name: 0.0 for name in EARNING_PLATFORMS}


def platform_net_breakdown(trip) -> Dict[str, float]:
    """
    Net earnings of one trip split by platform.

    Multi-platform trips use their stored per-platform details; a
    multi-platform trip without details is booked under offline.
    """
    breakdown = empty_platform_breakdown()
    platform = getattr(trip, 'platform', None) or MULTIPLE_PLATFORM
    if platform == MULTIPLE_PLATFORM:
        details = getattr(trip, 'platform_details', None)
        if details:
            for name, entry in details.items():
                if name in breakdown and entry and entry.get('earnings'):
                    breakdown[name] += entry['earnings'] - (entry.get('commission') or 0)
        else:
            breakdown['offline'] += trip_net_earnings(trip)
    elif platform in breakdown:
        breakdown[platform] += trip_net_earnings(trip)
    return breakdown


def _merge_breakdown(target: Dict[str, float], source: Dict[str, float]) -> None:
    for name, value in source.items():
        target[name] += value


def top_platform(breakdown: Dict[str, float]) -> str:
    """Platform with the highest net revenue; 'none' when nothing was earned."""
    best = max(breakdown.items(), key=lambda item: item[1], default=None)
    if best is None or best[1] <= 0:
        return 'none'
    return best[0]


def summarize_driver(driver, trips: Iterable, payments: Iterable = ()) -> dict:
    """
    Fold one driver's trips and salary payments into a summary.

    Earned salary is the commission share of net earnings. Salary received is
    what was taken on trip days plus explicit salary payments; pending salary
    is the difference, never below zero.
    """
    trips = list(trips)
    payments = list(payments)
    percentage = _num(driver, 'commission_percentage')

    breakdown = empty_platform_breakdown()
    gross = commission = net = earned = taken = 0.0
    fuel = other = online = cash = cash_in_hand = 0.0
    last_trip_date = None

    for trip in trips:
        trip_net = trip_net_earnings(trip)
        gross += _num(trip, 'trip_amount')
        commission += _num(trip, 'commission_amount')
        net += trip_net
        earned += trip_net * percentage / 100
        taken += _num(trip, 'driver_salary')
        fuel += _num(trip, 'fuel_cost')
        other += _num(trip, 'other_expenses')
        online += _num(trip, 'online_payment')
        cash += _num(trip, 'cash_collected')
        cash_in_hand += _num(trip, 'cash_in_driver_hand')
        _merge_breakdown(breakdown, platform_net_breakdown(trip))
        trip_date = getattr(trip, 'trip_date', None)
        if trip_date and (last_trip_date is None or trip_date > last_trip_date):
            last_trip_date = trip_date

    from_payments = sum(_num(p, 'amount') for p in payments)
    received = taken + from_payments

    return {
        'driver_id': getattr(driver, 'id', None),
        'name': getattr(driver, 'name', ''),
        'commission_percentage': percentage,
        'total_trips': len(trips),
        'gross_earnings': gross,
        'total_commission': commission,
        'total_earnings': net,
        'total_salary': earned,
        'salary_taken_on_trips': taken,
        'salary_from_payments': from_payments,
        'total_salary_paid': received,
        'pending_salary': max(0.0, to_paise(earned - received)),
        'total_expenses': fuel + other,
        'total_fuel_cost': fuel,
        'total_online_payments': online,
        'total_cash_collected': cash,
        'total_cash_in_hand': cash_in_hand,
        'platform_breakdown': breakdown,
        'last_trip_date': last_trip_date,
    }


def summarize_month(trips: Iterable, payments: Iterable, commission_percentage: float) -> dict:
    """Monthly salary rollup for one driver."""
    trips = list(trips)
    payments = list(payments)
    earnings = sum(trip_net_earnings(t) for t in trips)
    salary = earnings * (commission_percentage or 0) / 100
    taken = sum(_num(t, 'driver_salary') for t in trips)
    paid = sum(_num(p, 'amount') for p in payments)
    return {
        'total_earnings_this_month': earnings,
        'total_salary_this_month': salary,
        'total_paid_this_month': paid,
        'salary_taken_on_trips_this_month': taken,
        'remaining_salary_this_month': max(0.0, to_paise(salary - paid - taken)),
        'payments_this_month': len(payments),
        'commission_percentage': commission_percentage,
    }


def calculate_business_metrics(drivers: Iterable, trips: Iterable, payments: Iterable = ()) -> dict:
    """
    Whole-fleet health figures and a 0-100 risk score (lower is better).
    """
    drivers = list(drivers)
    trips = list(trips)
    payments = list(payments)
    percentages = {getattr(d, 'id', None): _num(d, 'commission_percentage') for d in drivers}

    revenue = expenses = fuel = salaries_paid = salaries_earned = 0.0
    breakdown = empty_platform_breakdown()
    for trip in trips:
        trip_net = trip_net_earnings(trip)
        revenue += trip_net
        expenses += trip_expenses(trip)
        fuel += _num(trip, 'fuel_cost')
        salaries_paid += _num(trip, 'driver_salary')
        driver_id = getattr(trip, 'driver_id', None)
        if driver_id in percentages:
            salaries_earned += trip_net * percentages[driver_id] / 100
        _merge_breakdown(breakdown, platform_net_breakdown(trip))

    salaries_paid += sum(_num(p, 'amount') for p in payments)

    pending = max(0.0, salaries_earned - salaries_paid)
    profit = revenue - expenses - salaries_earned
    profit_margin = profit / revenue * 100 if revenue > 0 else 0.0
    fuel_ratio = fuel / revenue * 100 if revenue > 0 else 0.0
    trip_count = len(trips)
    cash_flow = revenue - expenses - pending

    risk_score = 0
    if fuel_ratio > 25:
        risk_score += 20
    if profit_margin < 10:
        risk_score += 30
    if pending > revenue * 0.2:
        risk_score += 25
    if cash_flow < 0:
        risk_score += 25

    return {
        'total_revenue': revenue,
        'total_profit': profit,
        'total_expenses': expenses,
        'total_fuel_costs': fuel,
        'total_pending_salaries': pending,
        'total_cash_flow': cash_flow,
        'profit_margin': profit_margin,
        'fuel_cost_ratio': fuel_ratio,
        'avg_revenue_per_trip': revenue / trip_count if trip_count else 0.0,
        'avg_profit_per_trip': profit / trip_count if trip_count else 0.0,
        'top_performing_platform': top_platform(breakdown),
        'risk_score': risk_score,
    }


def _severity(value: float, critical: float) -> str:
    return 'high' if value > critical else 'medium'


def _rupees(amount: float) -> str:
    return f"₹{amount:,.2f}"


def pending_salary_risks(summaries: Iterable[dict], thresholds: RiskThresholds,
                         with_action: bool = False) -> List[dict]:
    risks = []
    for summary in summaries:
        pending = summary['pending_salary']
        if pending > thresholds.pending_salary_alert:
            risk = {
                'type': 'high_pending_salary',
                'driver': summary['name'],
                'amount': pending,
                'severity': _severity(pending, thresholds.pending_salary_critical),
                'message': f"High pending salary for {summary['name']}: {_rupees(pending)}",
            }
            if with_action:
                risk['action'] = 'Process salary payment immediately'
            risks.append(risk)
    return risks


def low_profitability_risks(analytics: Iterable[dict]) -> List[dict]:
    risks = []
    for driver in analytics:
        if driver['profitability'] < 10 and driver['total_trips'] > 5:
            risks.append({
                'type': 'low_profitability',
                'driver': driver['name'],
                'severity': 'high' if driver['profitability'] < 5 else 'medium',
                'message': f"Low profitability for {driver['name']}: {driver['profitability']:.1f}%",
            })
    return risks


def online_payment_risks(summaries: Iterable[dict], thresholds: RiskThresholds) -> List[dict]:
    risks = []
    for summary in summaries:
        online = summary['total_online_payments']
        if online > thresholds.online_payment_alert:
            risks.append({
                'type': 'high_online_payment',
                'driver': summary['name'],
                'amount': online,
                'severity': _severity(online, thresholds.online_payment_critical),
                'message': f"{summary['name']} has {_rupees(online)} in online payments - transfer to cashier needed",
            })
    return risks


def fuel_ratio_risk(fuel_costs: float, revenue: float, alert: float, critical: float,
                    risk_type: str = 'high_fuel_cost', action: Optional[str] = None) -> List[dict]:
    ratio = fuel_costs * 100 / revenue if revenue > 0 else 0.0
    if ratio <= alert:
        return []
    risk = {
        'type': risk_type,
        'amount': fuel_costs,
        'severity': _severity(ratio, critical),
        'message': f"High fuel cost ratio: {ratio:.1f}% of total revenue",
    }
    if action:
        risk['action'] = action
    return [risk]


def enrich_driver_analytics(summary: dict) -> dict:
    """Per-driver efficiency and profitability on top of a driver summary."""
    trips = summary['total_trips']
    earnings = summary['total_earnings']
    average = earnings / trips if trips else 0.0
    analytics = dict(summary)
    analytics['average_earnings_per_trip'] = average
    analytics['efficiency_score'] = min(100.0, average / 1000 * 100) if trips else 0.0
    analytics['profitability'] = (
        (earnings - summary['total_expenses'] - summary['total_salary']) / earnings * 100
        if earnings > 0 else 0.0
    )
    return analytics


def monthly_trend(trips: Iterable) -> List[dict]:
    """Revenue, expenses and profit per calendar month, oldest first."""
    buckets = defaultdict(lambda: {'revenue': 0.0, 'expenses': 0.0})
    for trip in trips:
        trip_date = getattr(trip, 'trip_date', None)
        if trip_date is None:
            continue
        bucket = buckets[(trip_date.year, trip_date.month)]
        bucket['revenue'] += trip_net_earnings(trip)
        bucket['expenses'] += trip_expenses(trip) + _num(trip, 'driver_salary')
    return [
        {
            'month': f"{year}-{month:02d}",
            'revenue': values['revenue'],
            'expenses': values['expenses'],
            'profit': values['revenue'] - values['expenses'],
        }
        for (year, month), values in sorted(buckets.items())
    ]


def build_business_analytics(drivers: Iterable, trips: Iterable, payments: Iterable,
                             cash_balance: float, thresholds: Optional[RiskThresholds] = None) -> dict:
    """
    Driver analytics, platform distribution and risk factors for the
    business-analytics dashboard.

    Revenue and expenses are accumulated over the active drivers passed in;
    expenses include the salary actually paid out.
    """
    thresholds = thresholds or RiskThresholds()
    drivers = list(drivers)
    trips = list(trips)
    payments = list(payments)

    trips_by_driver = defaultdict(list)
    for trip in trips:
        trips_by_driver[getattr(trip, 'driver_id', None)].append(trip)
    payments_by_driver = defaultdict(list)
    for payment in payments:
        payments_by_driver[getattr(payment, 'driver_id', None)].append(payment)

    driver_analytics = []
    platform_distribution = empty_platform_breakdown()
    revenue = expenses = fuel = online = cash = 0.0
    for driver in drivers:
        driver_trips = trips_by_driver.get(driver.id, [])
        summary = summarize_driver(driver, driver_trips, payments_by_driver.get(driver.id, []))
        analytics = enrich_driver_analytics(summary)
        driver_analytics.append(analytics)

        revenue += summary['total_earnings']
        expenses += summary['total_expenses'] + summary['total_salary_paid']
        fuel += summary['total_fuel_cost']
        online += summary['total_online_payments']
        cash += summary['total_cash_collected']
        _merge_breakdown(platform_distribution, summary['platform_breakdown'])

    pending = sum(d['pending_salary'] for d in driver_analytics)
    total_trips = len(trips)

    risk_factors = []
    risk_factors += pending_salary_risks(driver_analytics, thresholds)
    risk_factors += low_profitability_risks(driver_analytics)
    risk_factors += online_payment_risks(driver_analytics, thresholds)
    risk_factors += fuel_ratio_risk(fuel, revenue, alert=25, critical=35)
    for driver in driver_analytics:
        if driver['total_trips'] == 0:
            risk_factors.append({
                'type': 'inactive_driver',
                'driver': driver['name'],
                'severity': 'low',
                'message': f"{driver['name']} has no trips in the selected period",
            })

    return {
        'total_revenue': revenue,
        'total_expenses': expenses,
        'total_fuel_costs': fuel,
        'total_pending_salaries': pending,
        'total_online_payments': online,
        'total_cash_collected': cash,
        'total_active_drivers': len(drivers),
        'total_trips': total_trips,
        'average_revenue_per_trip': revenue / total_trips if total_trips else 0.0,
        'profit_margin': (revenue - expenses) / revenue * 100 if revenue > 0 else 0.0,
        'cash_flow_status': revenue - expenses - pending,
        'cash_balance': cash_balance,
        'platform_distribution': platform_distribution,
        'monthly_trend': monthly_trend(trips),
        'driver_analytics': driver_analytics,
        'top_performers': sorted(driver_analytics, key=lambda d: d['total_earnings'], reverse=True)[:3],
        'risk_factors': risk_factors,
        'business_health': calculate_business_metrics(drivers, trips, payments),
    }


def _activity_sort_key(item: dict):
    timestamp = item.get('timestamp')
    return (timestamp is not None, timestamp or date.min)


def build_owner_metrics(drivers: Iterable, trips: Iterable, payments: Iterable, cash_balance: float,
                        cashier_transactions: Iterable, thresholds: Optional[RiskThresholds] = None) -> dict:
    """
    Financial overview, cash position, driver statuses and the activity feed
    for the owner dashboard. Trips are expected newest first.
    """
    thresholds = thresholds or RiskThresholds()
    drivers = list(drivers)
    trips = list(trips)
    payments = list(payments)
    cashier_transactions = list(cashier_transactions)

    revenue = expenses = fuel = commissions = cash_in_hand = 0.0
    platform_revenue = empty_platform_breakdown()
    for trip in trips:
        revenue += trip_net_earnings(trip)
        expenses += trip_expenses(trip)
        fuel += _num(trip, 'fuel_cost')
        commissions += _num(trip, 'commission_amount')
        cash_in_hand += _num(trip, 'cash_in_driver_hand')
        _merge_breakdown(platform_revenue, platform_net_breakdown(trip))

    trips_by_driver = defaultdict(list)
    for trip in trips:
        trips_by_driver[getattr(trip, 'driver_id', None)].append(trip)
    payments_by_driver = defaultdict(list)
    for payment in payments:
        payments_by_driver[getattr(payment, 'driver_id', None)].append(payment)

    driver_summaries = []
    for driver in drivers:
        summary = summarize_driver(driver, trips_by_driver.get(driver.id, []),
                                   payments_by_driver.get(driver.id, []))
        trip_count = summary['total_trips']
        if summary['pending_salary'] > thresholds.pending_salary_alert:
            status = 'alert'
        elif trip_count > 0:
            status = 'active'
        else:
            status = 'inactive'
        driver_summaries.append({
            'driver_id': summary['driver_id'],
            'name': summary['name'],
            'total_earnings': summary['total_earnings'],
            'pending_salary': summary['pending_salary'],
            'total_trips': trip_count,
            'efficiency': min(100.0, summary['total_earnings'] / trip_count / 1000 * 100) if trip_count else 0.0,
            'last_trip_date': summary['last_trip_date'].isoformat() if summary['last_trip_date'] else '',
            'status': status,
        })

    pending = sum(d['pending_salary'] for d in driver_summaries)
    net_profit = revenue - expenses - pending
    profit_margin = net_profit * 100 / revenue if revenue > 0 else 0.0
    fuel_ratio = fuel / revenue * 100 if revenue > 0 else 0.0

    risk_factors = pending_salary_risks(driver_summaries, thresholds, with_action=True)
    if profit_margin < 10:
        risk_factors.append({
            'type': 'low_profit_margin',
            'severity': 'high' if profit_margin < 5 else 'medium',
            'message': f"Low profit margin: {profit_margin:.1f}%",
            'action': 'Review expenses and optimize operations',
        })
    risk_factors += fuel_ratio_risk(fuel, revenue, alert=30, critical=40, risk_type='high_fuel_costs',
                                    action='Optimize routes and fuel efficiency')
    inactive = [d for d in driver_summaries if d['status'] == 'inactive']
    if inactive:
        risk_factors.append({
            'type': 'inactive_drivers',
            'severity': 'low',
            'message': f"{len(inactive)} driver(s) inactive",
            'action': 'Follow up with inactive drivers',
        })

    activity = [
        {
            'type': 'trip',
            'amount': _num(trip, 'trip_amount'),
            'description': f"Trip completed by {trip.driver_name}",
            'timestamp': getattr(trip, 'created_at', None),
            'driver': trip.driver_name,
        }
        for trip in trips[:10]
    ] + [
        {
            'type': 'salary',
            'amount': _num(payment, 'amount'),
            'description': 'Salary payment',
            'timestamp': getattr(payment, 'created_at', None),
            'driver': payment.driver_name,
        }
        for payment in payments[:5]
    ] + [
        {
            'type': 'collection' if transaction.type == 'deposit' else 'expense',
            'amount': _num(transaction, 'amount'),
            'description': transaction.description,
            'timestamp': getattr(transaction, 'created_at', None),
        }
        for transaction in cashier_transactions[:5]
    ]
    activity.sort(key=_activity_sort_key, reverse=True)

    top_driver = max(driver_summaries, key=lambda d: d['total_earnings'])['name'] if driver_summaries else ''

    return {
        'total_revenue': revenue,
        'total_expenses': expenses,
        'net_profit': net_profit,
        'profit_margin': profit_margin,
        'total_cash_in_hand': cash_in_hand,
        'cashier_balance': cash_balance,
        'total_cash_flow': cash_in_hand + cash_balance,
        'pending_collections': cash_in_hand,
        'total_pending_salaries': pending,
        'total_drivers': len(drivers),
        'active_drivers': len([d for d in driver_summaries if d['status'] == 'active']),
        'total_trips': len(trips),
        'total_fuel_costs': fuel,
        'total_commissions': commissions,
        'average_revenue_per_trip': revenue / len(trips) if trips else 0.0,
        'fuel_cost_ratio': fuel_ratio,
        'top_performing_driver': top_driver,
        'most_profitable_platform': top_platform(platform_revenue),
        'daily_target': thresholds.daily_revenue_target,
        'target_achievement': revenue / thresholds.daily_revenue_target * 100 if thresholds.daily_revenue_target else 0.0,
        'platform_revenue': platform_revenue,
        'driver_summaries': sorted(driver_summaries, key=lambda d: d['total_earnings'], reverse=True),
        'risk_factors': risk_factors,
        'recent_transactions': activity[:15],
    }


PLATFORM_LABELS = {
    'uber': 'Uber',
    'indrive': 'InDrive',
    'yatri': 'Yatri',
    'rapido': 'Rapido',
    'offline': 'Offline',
}


def _format_date(value) -> str:
    return value.strftime('%d/%m/%Y') if value else ''


def build_whatsapp_summary(summary: dict, trips: List, date_from: Optional[date] = None,
                           date_to: Optional[date] = None) -> str:
    """
    Plain-text driver report ready to paste into WhatsApp.
    `trips` are expected newest first; the last five are listed.
    """
    date_str = f"({_format_date(date_from)} - {_format_date(date_to)})" if date_from and date_to else ''
    gross = sum(_num(t, 'trip_amount') for t in trips)
    commissions = sum(_num(t, 'commission_amount') for t in trips)
    expenses = sum(trip_expenses(t) for t in trips)
    cash_collected = sum(_num(t, 'cash_collected') for t in trips)
    online = sum(_num(t, 'online_payment') for t in trips)
    net = gross - commissions
    percentage = summary['commission_percentage']
    salary = net * percentage / 100

    lines = [
        f"🚗 *Fleet Management Report* {date_str}".rstrip(),
        "",
        f"👤 *Driver:* {summary['name']}",
        f"💼 *Commission Rate:* {percentage:g}%",
        "",
        "📊 *Financial Summary:*",
        f"💰 Gross Earnings: ₹{gross:.2f}",
        f"📉 Platform Commissions: -₹{commissions:.2f}",
        f"✅ Net Earnings: ₹{net:.2f}",
        f"💵 Driver Salary ({percentage:g}%): ₹{salary:.2f}",
        f"🔄 Salary Paid: ₹{summary['total_salary_paid']:.2f}",
        f"⏳ Pending Salary: ₹{summary['pending_salary']:.2f}",
        f"🚕 Total Trips: {summary['total_trips']}",
        "",
        "🏢 *Platform Breakdown (Net Earnings):*",
    ]
    for name, label in PLATFORM_LABELS.items():
        lines.append(f"{label}: ₹{summary['platform_breakdown'].get(name, 0.0):.2f}")
    lines.append("")

    if expenses > 0 or cash_collected > 0:
        lines.append("💼 *Cash Flow:*")
        lines.append(f"💴 Cash Collected: ₹{cash_collected:.2f}")
        lines.append(f"💳 Online Payments: ₹{online:.2f}")
        if expenses > 0:
            lines.append(f"⛽ Total Expenses: ₹{expenses:.2f}")
        lines.append("")

    if trips:
        lines.append("📋 *Recent Trips:*")
        for index, trip in enumerate(trips[:5], start=1):
            lines.append(f"{index}. {_trip_platform_label(trip)} - Total: ₹{_num(trip, 'trip_amount'):g} "
                         f"({_format_date(getattr(trip, 'trip_date', None))})")
        lines.append("")

    lines.append("📱 Generated by Fleet Management System")
    return "\n".join(lines)


def _trip_platform_label(trip) -> str:
    platform = getattr(trip, 'platform', None) or MULTIPLE_PLATFORM
    if platform != MULTIPLE_PLATFORM:
        return PLATFORM_LABELS.get(platform, platform.capitalize())
    details = getattr(trip, 'platform_details', None) or {}
    active = [
        f"{label}: ₹{details[name]['earnings']:g}"
        for name, label in PLATFORM_LABELS.items()
        if details.get(name) and details[name].get('earnings')
    ]
    return ", ".join(active) if active else 'Multiple Platforms'
