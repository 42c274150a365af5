from fleetbooks.models.driver import Driver
from fleetbooks.models.trip import Trip, Platform, NegativeCashOption
from fleetbooks.models.salary_payment import SalaryPayment, PaymentMethod
from fleetbooks.models.monthly_salary_summary import MonthlySalarySummary
from fleetbooks.models.cashier import CashierTransaction, CashBalance, TransactionType
