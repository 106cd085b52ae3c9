from django.urls import path
from . import views

app_name = 'branches'

urlpatterns = [
    path('', views.branch_list, name='branch-list'),
    path('<str:branch_id>/', views.branch_detail, name='branch-detail'),
]
