from django.urls import path
from . import views

app_name = 'uploads'

urlpatterns = [
    path('', views.upload_image, name='upload'),
    path('<str:filename>/', views.delete_uploaded_image, name='delete'),
]
