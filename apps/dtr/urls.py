from django.urls import path
from . import views

app_name = 'dtr'

urlpatterns = [
    path('status/', views.dtr_status, name='status'),
    path('clock-in/', views.clock_in, name='clock-in'),
    path('clock-out/', views.clock_out, name='clock-out'),
    path('records/', views.records, name='records'),
    path('summary/<int:year>/<int:month>/', views.monthly_summary, name='monthly-summary'),
    path('all/', views.all_records, name='all-records'),
]
