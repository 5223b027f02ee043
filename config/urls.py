# config/urls.py

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # Aplicações principais
    path('', include('apps.core.urls')),
    path('', include('apps.board.urls')),
]

# Servir arquivos de mídia (anexos) em desenvolvimento
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

    # Debug Toolbar se disponível
    try:
        import debug_toolbar

        urlpatterns = [
                          path('__debug__/', include(debug_toolbar.urls)),
                      ] + urlpatterns
    except ImportError:
        pass

# Customizar títulos do admin
admin.site.site_header = 'Kanban Sync Admin'
admin.site.site_title = 'Kanban Sync'
admin.site.index_title = 'Administração do Sistema'
