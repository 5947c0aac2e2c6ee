# config/pagination.py
from rest_framework.pagination import PageNumberPagination

class StandardResultsSetPagination(PageNumberPagination):
    # Una organización tiene pocas series: la primera página llena el selector de series del front
    page_size = 50
    page_size_query_param = "page_size"
    max_page_size = 500                   # techo para ?page_size= en listados de administración
