"""
Server-rendered pages. Forms post to the JSON API from the browser; the
pages here only read.
"""
from flask import Blueprint, current_app, render_template, request, redirect, url_for, flash

from fleetbooks.extensions import limiter
from fleetbooks.services.analytics_service import AnalyticsService
from fleetbooks.services.cashier_service import CashierService
from fleetbooks.services.driver_service import DriverService
from fleetbooks.services.errors import ServiceError
from fleetbooks.services.monthly_salary_service import MonthlySalaryService
from fleetbooks.services.salary_payment_service import SalaryPaymentService
from fleetbooks.utils.owner_gate import login_owner, logout_owner, owner_required
from fleetbooks.utils.timezone_utils import ANALYTICS_PERIODS, OWNER_PERIODS, display_today

views_bp = Blueprint('views', __name__)

PLATFORMS = [
    ('uber', 'Uber'),
    ('indrive', 'InDrive'),
    ('yatri', 'Yatri'),
    ('rapido', 'Rapido'),
    ('offline', 'Offline'),
]


def _render_error(template, error, **context):
    flash(error.message, 'error')
    return render_template(template, **context), error.status_code


@views_bp.route('/')
def index():
    try:
        data = AnalyticsService.dashboard()
    except ServiceError as se:
        return _render_error('index.html', se, drivers=[], stats={})
    return render_template('index.html', drivers=data['drivers'], stats=data['overall_stats'])


@views_bp.route('/add-trip')
def add_trip():
    try:
        drivers = DriverService.get_all()
    except ServiceError as se:
        return _render_error('add_trip.html', se, drivers=[], platforms=PLATFORMS, today=display_today())
    return render_template('add_trip.html', drivers=drivers, platforms=PLATFORMS, today=display_today())


@views_bp.route('/salary-payments')
def salary_payments():
    page = request.args.get('page', 1, type=int)
    try:
        drivers = DriverService.get_all()
        payments = SalaryPaymentService.list_payments(page=max(page, 1))
    except ServiceError as se:
        return _render_error('salary_payments.html', se, drivers=[], payments=None, today=display_today())
    return render_template('salary_payments.html', drivers=drivers, payments=payments, today=display_today())


@views_bp.route('/cashier')
def cashier():
    page = request.args.get('page', 1, type=int)
    tx_type = request.args.get('type')
    try:
        ledger = CashierService.list_transactions(tx_type=tx_type, page=max(page, 1))
    except ServiceError as se:
        return _render_error('cashier.html', se, ledger=None, tx_type=tx_type, today=display_today())
    return render_template('cashier.html', ledger=ledger, tx_type=tx_type, today=display_today())


@views_bp.route('/driver-reports')
def driver_reports():
    today = display_today()
    driver_id = request.args.get('driver_id', type=int)
    month = request.args.get('month', today.month, type=int)
    year = request.args.get('year', today.year, type=int)
    if not 1 <= month <= 12:
        month = today.month

    report = None
    try:
        drivers = DriverService.get_all()
        if driver_id:
            report = MonthlySalaryService.get_monthly(driver_id, month, year)
            if report is None:
                flash('Driver not found', 'error')
    except ServiceError as se:
        return _render_error('driver_reports.html', se, drivers=[], report=None,
                             driver_id=driver_id, month=month, year=year)
    return render_template('driver_reports.html', drivers=drivers, report=report,
                           driver_id=driver_id, month=month, year=year)


@views_bp.route('/owner')
@owner_required
def owner():
    period = request.args.get('period', 'today')
    if period not in OWNER_PERIODS:
        period = 'today'
    try:
        metrics = AnalyticsService.owner_dashboard(period)
    except ServiceError as se:
        return _render_error('owner.html', se, metrics=None, period=period, periods=OWNER_PERIODS)
    return render_template('owner.html', metrics=metrics, period=period, periods=OWNER_PERIODS)


@views_bp.route('/business-analytics')
@owner_required
def business_analytics():
    periods = list(ANALYTICS_PERIODS) + ['all']
    period = request.args.get('period', '30d')
    if period not in periods:
        period = '30d'
    try:
        analytics = AnalyticsService.business_analytics(period)
    except ServiceError as se:
        return _render_error('business_analytics.html', se, analytics=None, period=period, periods=periods)
    return render_template('business_analytics.html', analytics=analytics, period=period, periods=periods)


@views_bp.route('/owner-login', methods=['GET', 'POST'])
@limiter.limit(lambda: current_app.config['OWNER_AUTH_RATE_LIMIT'], methods=['POST'])
def owner_login():
    next_url = request.values.get('next') or url_for('views.owner')
    if not next_url.startswith('/') or next_url.startswith('//'):
        next_url = url_for('views.owner')
    if request.method == 'POST':
        if login_owner(request.form.get('password')):
            return redirect(next_url)
        flash('Invalid owner password', 'error')
    return render_template('owner_login.html', next_url=next_url)


@views_bp.route('/owner-logout', methods=['POST'])
def owner_logout():
    logout_owner()
    flash('Logged out', 'success')
    return redirect(url_for('views.index'))


@views_bp.app_template_filter('rupees')
def rupees(value):
    return f"₹{(value or 0):,.2f}"
