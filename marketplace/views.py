from rest_framework import viewsets, permissions, decorators, response, mixins
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import SearchFilter, OrderingFilter
from .filters import ProductFilter
from .models import Product
from .serializers import ProductSerializer


class ProductViewSet(mixins.CreateModelMixin,
                     mixins.RetrieveModelMixin,
                     mixins.ListModelMixin,
                     viewsets.GenericViewSet):
    """
    出品の一覧・詳細・新規作成。
    掲載後の編集は扱わない（is_sold はチャットの取引完了でのみ変わる）。
    """
    queryset = Product.objects.select_related("seller").prefetch_related("images")
    serializer_class = ProductSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = ProductFilter
    search_fields = ["title", "description"]
    ordering_fields = ["created_at", "price"]
    ordering = ["-created_at", "-id"]

    def perform_create(self, serializer):
        serializer.save(seller=self.request.user)

    @decorators.action(detail=False, methods=["get"], permission_classes=[permissions.IsAuthenticated])
    def mine(self, request):
        qs = self.filter_queryset(self.get_queryset().filter(seller=request.user))
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return response.Response(self.get_serializer(qs, many=True).data)
