"""URL routes for uploads app."""

from django.urls import path

from server.apps.uploads import views

app_name = 'uploads'

urlpatterns = [
    path('', views.index, name='index'),
    path('upload', views.upload, name='upload'),
    path('files/<uuid:record_id>/delete', views.delete, name='delete'),
]
