from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    path('daily/', views.daily_sales, name='daily-sales'),
    path('owners/', views.owner_stats, name='owner-stats'),
    path('monthly/', views.monthly_sales, name='monthly-sales'),

    # Daily summary validation
    path('daily-summary/', views.daily_summary_status, name='daily-summary'),
    path('daily-summary/validate/', views.validate_daily_summary_view, name='daily-summary-validate'),
]
