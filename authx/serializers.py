from rest_framework import serializers
from users.models import User


class SignupSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=8)
    age = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=120)

    class Meta:
        model = User
        fields = ['username', 'email', 'password', 'full_name', 'age']

    def create(self, validated_data):
        user = User.objects.create_user(
            username=validated_data['username'],
            email=validated_data.get('email', ''),
            password=validated_data['password'],
            full_name=validated_data.get('full_name', ''),
            age=validated_data.get('age'),
        )
        return user
