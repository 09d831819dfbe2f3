"""Doctor domain - Administration, search filters and availability endpoint"""
